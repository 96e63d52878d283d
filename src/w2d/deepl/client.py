"""Client for the DeepL translation API.

See https://www.deepl.com/docs-api/ . An auth key is obtained by creating a
DeepL API account (Free or Pro). Only the calls w2d needs are covered.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Optional, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from ..errors import TranslationError
from .models import SupportedLanguage, TranslateResponse

logger = logging.getLogger(__name__)

PRO_ENDPOINT = "https://api.deepl.com/v2/"
FREE_ENDPOINT = "https://api-free.deepl.com/v2/"

# https://www.deepl.com/docs-api/accessing-the-api/error-handling/
KNOWN_ERRORS = {
    400: "Bad request. Please check error message and your parameters.",
    403: "Authorization failed. Please supply a valid auth_key parameter.",
    404: "The requested resource could not be found.",
    413: "The request size exceeds the limit.",
    414: (
        "The request URL is too long. You can avoid this error by using a POST request "
        "instead of a GET request, and sending the parameters in the HTTP body."
    ),
    429: "Too many requests. Please wait and resend your request.",
    456: "Quota exceeded. The character limit has been reached.",
    503: "Resource currently unavailable. Try again later.",
    529: "Too many requests. Please wait and resend your request.",
}

T = TypeVar("T")

_TRANSLATE_ADAPTER = TypeAdapter(TranslateResponse)
_LANGUAGES_ADAPTER = TypeAdapter(list[SupportedLanguage])


def determine_endpoint(auth_key: str) -> str:
    """Return the API base URL for a key; free-plan keys end with ":fx"."""
    if auth_key.endswith(":fx"):
        return FREE_ENDPOINT
    return PRO_ENDPOINT


def validate_response(response: requests.Response) -> None:
    """
    Raise if the response does not carry a 2xx status.

    The message names the status, the documented meaning of known DeepL
    error codes, and the server's own message when the body provides one.

    Raises:
        TranslationError: For any non-2xx status
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    try:
        reason = HTTPStatus(status).phrase
    except ValueError:
        reason = response.reason or ""

    message = f"Invalid response [{status} {reason}]" if reason else f"Invalid response [{status}]"
    if status in KNOWN_ERRORS:
        message += f" {KNOWN_ERRORS[status]}"

    try:
        data = response.json()
    except ValueError:
        raise TranslationError(message) from None

    if isinstance(data, dict) and data.get("message"):
        message += f", {data['message']}"
    raise TranslationError(message)


def parse_response(response: requests.Response, adapter: TypeAdapter[T]) -> T:
    """
    Decode a JSON response body into the adapter's type.

    Raises:
        TranslationError: If the body is not JSON or does not match the type
    """
    try:
        return adapter.validate_python(response.json())
    except (ValueError, ValidationError) as e:
        raise TranslationError(f"{e} (occurred while parse response)") from e


class DeepLClient:
    """
    Minimal DeepL API client.

    Example:
        client = DeepLClient(auth_key)
        text = client.translate_to_string(markdown, "DE")
    """

    def __init__(
        self,
        auth_key: str,
        endpoint: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            auth_key: DeepL authentication key
            endpoint: API base URL (default: chosen from the key type)
            timeout: Request timeout in seconds
            session: requests session to send calls with
        """
        self.auth_key = auth_key
        self.endpoint = endpoint or determine_endpoint(auth_key)
        if not self.endpoint.endswith("/"):
            self.endpoint += "/"
        self._timeout = timeout
        self._session = session or requests.Session()

    def _post(self, path: str, data: dict[str, Any]) -> requests.Response:
        url = self.endpoint + path
        logger.debug("POST %s", url)
        try:
            response = self._session.post(
                url,
                data=data,
                headers={"Authorization": f"DeepL-Auth-Key {self.auth_key}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise TranslationError(f"request to {url} failed: {e}") from e

        validate_response(response)
        return response

    def translate(self, text: str, target_lang: str, source_lang: str = "") -> list[str]:
        """
        Translate text from source_lang to target_lang.

        An empty source_lang lets DeepL detect the source language. Use
        supported_languages() to query possible language codes.

        Returns:
            The translated text segments in order
        """
        data = {"text": text, "target_lang": target_lang}
        if source_lang:
            data["source_lang"] = source_lang

        parsed = parse_response(self._post("translate", data), _TRANSLATE_ADAPTER)
        logger.info("Translated %d characters into %d segments", len(text), len(parsed.translations))
        return [translation.text for translation in parsed.translations]

    def translate_to_string(self, text: str, target_lang: str, source_lang: str = "") -> str:
        """Same as translate() but returns the concatenated text."""
        return "".join(self.translate(text, target_lang, source_lang))

    def supported_languages(self, target: bool = False) -> dict[str, SupportedLanguage]:
        """Return supported source languages, or target languages if target is True."""
        data = {"type": "target" if target else "source"}
        languages = parse_response(self._post("languages", data), _LANGUAGES_ADAPTER)
        return {language.language: language for language in languages}
