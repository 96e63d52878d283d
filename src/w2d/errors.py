"""Exception hierarchy for w2d.

Everything raised on purpose by the library derives from ``W2DError`` so the
command line can report it without a traceback.
"""

from __future__ import annotations


class W2DError(Exception):
    """Base exception for all w2d errors."""


class UnparsableInputError(W2DError):
    """Raised when the article bytes cannot be read as text at all."""


class RuleApplicationError(W2DError):
    """Raised when a rewrite rule cannot produce output for an element."""

    def __init__(self, tag: str, reason: str):
        super().__init__(f"rule for <{tag}> failed: {reason}")
        self.tag = tag
        self.reason = reason


class SourceError(W2DError):
    """Raised when an article cannot be opened from a URL or stdin."""


class TranslationError(W2DError):
    """Raised when the DeepL API call fails or returns an unusable payload."""


class ConfigError(W2DError):
    """Raised when a configuration file cannot be loaded."""
