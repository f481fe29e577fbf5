"""Top candidate selection and sibling admission."""

import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from ..config import Settings
from . import dom
from .scoring import Candidate, CandidateMap, link_density

logger = logging.getLogger(__name__)

MIN_SIBLING_THRESHOLD = 10
SIBLING_SCORE_RATIO = 0.2
LONG_PARAGRAPH_LENGTH = 80
LONG_PARAGRAPH_MAX_LINK_DENSITY = 0.25


@dataclass
class Selection:
    """The winning candidate and the nodes admitted alongside it."""

    best: Candidate
    threshold: float
    nodes: list[Tag] = field(default_factory=list)


def top_candidate(root: BeautifulSoup, candidates: CandidateMap) -> Candidate:
    """Highest scoring candidate, falling back to <body> (or the root)."""
    best = None
    for candidate in candidates:
        if best is None or candidate.score > best.score:
            best = candidate
    if best is None:
        body = root.find("body")
        logger.debug("[EXTRACT] No candidates found, falling back to <body>")
        best = Candidate(body if body is not None else root, 0.0)
    return best


def _admit_paragraph(node: Tag, settings: Settings) -> bool:
    text = dom.inner_text(node)
    density = link_density(node)
    if len(text) >= LONG_PARAGRAPH_LENGTH:
        return density < LONG_PARAGRAPH_MAX_LINK_DENSITY
    return density == 0 and settings.sentence_pattern.search(text) is not None


def select(root: BeautifulSoup, candidates: CandidateMap, settings: Settings) -> Selection:
    """Pick the best candidate and collect related siblings.

    Siblings of the best node are admitted, in document order, when they
    score close enough to it or when they are paragraphs that read like
    article text.
    """
    best = top_candidate(root, candidates)
    threshold = max(MIN_SIBLING_THRESHOLD, best.score * SIBLING_SCORE_RATIO)
    selection = Selection(best=best, threshold=threshold)

    parent = best.node.parent
    if parent is None:
        selection.nodes.append(best.node)
        return selection

    for sibling in dom.element_children(parent):
        if sibling is best.node:
            admitted = True
        else:
            candidate = candidates.get(sibling)
            admitted = candidate is not None and candidate.score >= threshold
            if not admitted and dom.tag_name(sibling) == "p":
                admitted = _admit_paragraph(sibling, settings)
        if admitted:
            selection.nodes.append(sibling)

    logger.debug(
        f"[EXTRACT] Selected <{dom.tag_name(best.node)}> with score {best.score:.2f}, "
        f"{len(selection.nodes)} node(s) admitted (threshold {threshold:.2f})"
    )
    return selection
