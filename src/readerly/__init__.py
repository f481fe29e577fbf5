"""readerly - readable article extraction from HTML pages."""

from .config import Settings, get_settings
from .document import Document, ParseError, parse
from .fetch import FetchError, from_file, from_url

__all__ = [
    "Document",
    "FetchError",
    "ParseError",
    "Settings",
    "from_file",
    "from_url",
    "get_settings",
    "parse",
]
