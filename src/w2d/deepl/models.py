"""Response payloads of the DeepL API."""

from typing import Optional

from pydantic import BaseModel


class Translation(BaseModel):
    """One translated text segment."""

    text: str
    detected_source_language: Optional[str] = None


class TranslateResponse(BaseModel):
    """Body of a /translate response."""

    translations: list[Translation]


class SupportedLanguage(BaseModel):
    """Entry of a /languages response."""

    language: str
    name: str
    supports_formality: bool = False
