"""Shared utility functions for readerly."""

import re
from urllib.parse import urljoin

ABSOLUTE_URL_PREFIXES = ("http://", "https://", "ftp://")

_LINE_BREAKS = re.compile(r"[ \t\v\r\n\f]*[\r\n\f][ \t\v\r\n\f]*")
_SPACES = re.compile(r"[ \t\v]+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs in serialized output.

    Line-break runs (with any surrounding spaces) become a single newline,
    other whitespace runs become a single space.
    """
    text = _LINE_BREAKS.sub("\n", text)
    return _SPACES.sub(" ", text)


def resolve_url(value: str, base_url: str | None) -> str:
    """Resolve a possibly relative URL against a base URL.

    Args:
        value: The href/src value as found in the document
        base_url: The document's base URL, if known

    Returns:
        The absolute URL, or the original value if there is no base URL,
        the value is already absolute, or it cannot be resolved
    """
    if not base_url or value.startswith(ABSOLUTE_URL_PREFIXES):
        return value
    try:
        return urljoin(base_url, value)
    except ValueError:
        return value
