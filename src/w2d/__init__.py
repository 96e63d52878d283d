"""
w2d - converts Wikipedia articles to markdown and translates them with DeepL.

Usage:
    from w2d import ArticleParser

    parser = ArticleParser()
    with open("article.html", "rb") as f:
        markdown = parser.parse(f)
"""

__version__ = "1.0.0"

from .conversion import ArticleParser, RuleSet, default_rules
from .deepl import DeepLClient
from .errors import (
    ConfigError,
    RuleApplicationError,
    SourceError,
    TranslationError,
    UnparsableInputError,
    W2DError,
)
from .models.config import DeepLConfig, NetworkConfig, ParserConfig, W2DConfig
from .source import open_article

__all__ = [
    "__version__",
    # Conversion
    "ArticleParser",
    "RuleSet",
    "default_rules",
    # Collaborators
    "DeepLClient",
    "open_article",
    # Config
    "W2DConfig",
    "ParserConfig",
    "NetworkConfig",
    "DeepLConfig",
    # Errors
    "W2DError",
    "UnparsableInputError",
    "RuleApplicationError",
    "SourceError",
    "TranslationError",
    "ConfigError",
]
