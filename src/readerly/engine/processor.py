"""Main extraction pipeline."""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ..config import Settings
from .preprocessor import preprocess
from .sanitizer import sanitize
from .scoring import score_candidates
from .selector import select

logger = logging.getLogger(__name__)


class Processor:
    """Orchestrates the extraction pipeline: preprocess -> score -> select -> sanitize."""

    def __init__(self, settings: Settings, base_url: Optional[str] = None):
        self.settings = settings
        self.base_url = base_url

    def run(self, root: BeautifulSoup) -> str:
        """Extract the main content of a document.

        The tree is modified in place and must not be used by anyone else
        while this runs.

        Returns:
            The sanitized content markup
        """
        preprocess(root, self.settings)

        candidates = score_candidates(root, self.settings)
        selection = select(root, candidates, self.settings)

        content = sanitize(selection.nodes, self.settings, self.base_url)
        logger.info(f"[EXTRACT] Extracted {len(content)} chars of content")
        return content
