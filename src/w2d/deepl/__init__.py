"""DeepL translation API client."""

from .client import (
    FREE_ENDPOINT,
    KNOWN_ERRORS,
    PRO_ENDPOINT,
    DeepLClient,
    determine_endpoint,
    parse_response,
    validate_response,
)
from .models import SupportedLanguage, TranslateResponse, Translation

__all__ = [
    "DeepLClient",
    "FREE_ENDPOINT",
    "KNOWN_ERRORS",
    "PRO_ENDPOINT",
    "SupportedLanguage",
    "TranslateResponse",
    "Translation",
    "determine_endpoint",
    "parse_response",
    "validate_response",
]
