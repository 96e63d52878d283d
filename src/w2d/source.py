"""Opening article HTML from a URL or standard input."""

from __future__ import annotations

import io
import logging
import sys
from typing import BinaryIO, Optional
from urllib.parse import urlparse

import requests

from .errors import SourceError
from .models.config import NetworkConfig

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"
ALLOWED_SCHEMES = frozenset({"http", "https"})
DEFAULT_USER_AGENT = "w2d/1.0 (+https://github.com/IljaN/w2d)"


def _stdin_attached(stdin: BinaryIO) -> bool:
    """Return True if stdin is redirected from a file or pipe."""
    try:
        return not stdin.isatty()
    except ValueError:
        # Closed stream
        return False


def validate_url(url: str) -> str:
    """
    Check that a string is an absolute http(s) URL.

    Raises:
        SourceError: If the URL is relative, has no host or an unsupported scheme
    """
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise SourceError(f"unsupported URL scheme in {url!r} (expected http or https)")
    if not parsed.netloc:
        raise SourceError(f"URL has no host: {url!r}")
    return url


def fetch_article(url: str, network: Optional[NetworkConfig] = None) -> BinaryIO:
    """
    Download an article and return its body as a byte stream.

    Raises:
        SourceError: On network failure or a non-2xx response
    """
    network = network or NetworkConfig()
    headers = {"User-Agent": network.user_agent or DEFAULT_USER_AGENT}

    logger.info("Fetching %s", url)
    try:
        with requests.get(validate_url(url), headers=headers, timeout=network.timeout) as response:
            response.raise_for_status()
            content = response.content
    except requests.RequestException as e:
        raise SourceError(f"failed to fetch {url}: {e}") from e

    logger.debug("Fetched %d bytes from %s", len(content), url)
    return io.BytesIO(content)


def open_article(
    src: str,
    network: Optional[NetworkConfig] = None,
    stdin: Optional[BinaryIO] = None,
) -> BinaryIO:
    """
    Open the article named on the command line.

    Args:
        src: Full URL of the article, or "-" to read from standard input
        network: HTTP settings for URL sources
        stdin: Stream to use instead of sys.stdin.buffer

    Returns:
        A readable byte stream; the caller owns it and must close it

    Raises:
        SourceError: If stdin is requested but not redirected, or the URL
            cannot be fetched
    """
    if src == STDIN_MARKER:
        stream = stdin if stdin is not None else sys.stdin.buffer
        if not _stdin_attached(stream):
            raise SourceError("stdin redirection required if '-' is given")
        return stream

    return fetch_article(src, network)
