"""Whitespace normalization for rendered blocks."""

import re

_BLANK_RUN = re.compile(r"\n{2,}")


def normalize_block(text: str) -> str:
    """Strip leading newlines and collapse runs of newlines to one blank line."""
    return _BLANK_RUN.sub("\n\n", text.lstrip("\n"))
