"""Loading documents from the web or the local filesystem."""

import ipaddress
import logging
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import httpx

from .config import Settings, get_settings
from .document import Document, parse

logger = logging.getLogger(__name__)

BLOCKED_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "169.254.169.254"}


class FetchError(Exception):
    """Raised when a document cannot be loaded."""


def validate_url(url: str, settings: Settings) -> None:
    """Validate a URL before fetching it.

    Raises:
        FetchError: If the URL is invalid or targets internal resources
    """
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Invalid URL scheme: {parsed.scheme!r}")

    hostname = parsed.hostname
    if not hostname:
        raise FetchError("Invalid URL: missing hostname")

    if settings.allow_private_hosts:
        return

    if hostname.lower() in BLOCKED_HOSTS:
        raise FetchError("Access to internal resources is blocked")

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        # Not an IP address, hostname is fine
        return
    if ip.is_private or ip.is_loopback or ip.is_link_local:
        raise FetchError("Access to private IP addresses is blocked")


def fetch_html(url: str, settings: Settings) -> tuple[Union[str, bytes], str]:
    """Fetch HTML content from a URL.

    The body is returned decoded when the response declares a charset, and
    as raw bytes otherwise so the parser can sniff the encoding.

    Returns:
        Tuple of (html_content, final_url_after_redirects)

    Raises:
        FetchError: If the URL is rejected or the request fails
    """
    validate_url(url, settings)

    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    try:
        with httpx.Client(follow_redirects=True, timeout=settings.fetch_timeout) as client:
            response = client.get(url, headers=headers)
            response.raise_for_status()
    except httpx.TimeoutException as e:
        logger.error(f"[FETCH] Timeout fetching {url}")
        raise FetchError(f"Timed out fetching {url}") from e
    except httpx.HTTPStatusError as e:
        logger.error(f"[FETCH] HTTP {e.response.status_code} fetching {url}")
        raise FetchError(f"Failed to fetch URL (HTTP {e.response.status_code})") from e
    except httpx.RequestError as e:
        logger.error(f"[FETCH] Network error fetching {url}: {e}")
        raise FetchError(f"Network error fetching {url}") from e

    final_url = str(response.url)
    body = response.text if response.charset_encoding else response.content
    logger.info(f"[FETCH] Fetched {len(response.content)} bytes from {final_url}")
    return body, final_url


def from_url(url: str, settings: Optional[Settings] = None) -> Document:
    """Fetch a page and open it as a Document.

    Relative links in the content are resolved against the final URL, after
    redirects.
    """
    settings = settings or get_settings()
    body, final_url = fetch_html(url, settings)
    return parse(body, url=final_url, settings=settings)


def from_file(path: Path, url: Optional[str] = None, settings: Optional[Settings] = None) -> Document:
    """Open a local HTML file as a Document.

    Raises:
        FetchError: If the file cannot be read
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FetchError(f"Could not read {path}: {e}") from e
    logger.debug(f"[FETCH] Read {len(data)} bytes from {path}")
    return parse(data, url=url, settings=settings)
