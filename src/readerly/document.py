"""Extraction sessions over a parsed HTML document."""

import logging
import threading
from typing import IO, Optional, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup

from .config import Settings, get_settings
from .engine import Processor, resolve_title

logger = logging.getLogger(__name__)

Source = Union[str, bytes, IO[str], IO[bytes]]


class ParseError(Exception):
    """Raised when the markup cannot be turned into a document tree."""


class Document:
    """An article document: one parsed tree and its extracted title and content.

    Title and content are each computed once, on first access, and cached.
    Extraction rewrites the tree in place, so the tree belongs to the
    Document from the moment it is handed over. Accessors are safe to call
    from several threads; the first caller computes while the others wait.
    """

    def __init__(self, root: BeautifulSoup, url: Optional[str] = None, settings: Optional[Settings] = None):
        self.root = root
        self.url = url or None
        self.settings = settings or get_settings()
        self._lock = threading.Lock()
        self._title: Optional[str] = None
        self._content: Optional[str] = None

    def __repr__(self) -> str:
        return f"Document(url={self.url!r})"

    def title(self) -> str:
        """Article title of the page."""
        if self._title is None:
            with self._lock:
                if self._title is None:
                    self._title = resolve_title(self.root)
        return self._title

    def content(self) -> str:
        """Sanitized markup of the article's main content."""
        if self._content is None:
            with self._lock:
                if self._content is None:
                    # Title first: extraction below mutates the tree
                    if self._title is None:
                        self._title = resolve_title(self.root)
                    self._content = Processor(self.settings, self.url).run(self.root)
        return self._content

    def text(self) -> str:
        """Plain text of the main content, one block per line."""
        content = self.content()
        if not content:
            return ""
        return BeautifulSoup(content, "lxml").get_text("\n", strip=True)


def parse(source: Source, url: Optional[str] = None, settings: Optional[Settings] = None) -> Document:
    """Parse HTML into a Document.

    Args:
        source: Markup as str or bytes, or a reader returning either.
            Bytes are decoded with BeautifulSoup's encoding detection.
        url: Base URL used to make links and image sources absolute
        settings: Extraction settings, defaults to ``get_settings()``

    Raises:
        ParseError: If the source is not markup or the parser rejects it
    """
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytearray):
        source = bytes(source)
    if not isinstance(source, (str, bytes)):
        raise ParseError(f"Unsupported source type: {type(source).__name__}")

    try:
        root = BeautifulSoup(source, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Parsing HTML error: {e}") from e

    logger.debug(f"[EXTRACT] Parsed document ({len(source)} {'bytes' if isinstance(source, bytes) else 'chars'})")
    return Document(root, url=url, settings=settings)
