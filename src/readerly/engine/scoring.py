"""Content scoring of candidate containers."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from bs4 import BeautifulSoup, Tag

from ..config import Settings
from . import dom

logger = logging.getLogger(__name__)

CLASS_WEIGHT = 25

TAG_BONUSES = {
    "article": 10,
    "section": 8,
    "div": 5,
    "pre": 3, "td": 3, "blockquote": 3,
    "address": -3, "ol": -3, "ul": -3, "dl": -3, "dd": -3, "dt": -3, "li": -3, "form": -3,
    "h1": -5, "h2": -5, "h3": -5, "h4": -5, "h5": -5, "h6": -5, "th": -5,
}

ITEMSCOPE_BONUS = 5
ITEMTYPE_BONUS = 30

COMMA_CHARACTERS = (",", "，")


def count_commas(text: str) -> int:
    """Count ASCII and full-width commas."""
    return sum(text.count(comma) for comma in COMMA_CHARACTERS)


def class_weight(node: Tag, settings: Settings) -> int:
    """Signed weight from the element's class and id vocabulary.

    class and id are checked separately; each scores -25 on a boilerplate
    match and +25 on a content match.
    """
    weight = 0
    for key in ("class", "id"):
        value = dom.attr(node, key)
        if not value:
            continue
        if settings.negative_pattern.search(value):
            weight -= CLASS_WEIGHT
        if settings.positive_pattern.search(value):
            weight += CLASS_WEIGHT
    return weight


def link_density(node: Tag) -> float:
    """Share of the node's text that sits inside real links.

    Anchors without an href or pointing at "#" do not count. A node with no
    text has a density of 0.
    """
    text_length = dom.text_length(node)
    if text_length == 0:
        return 0.0
    link_length = 0
    for anchor in node.find_all("a"):
        href = dom.attr(anchor, "href")
        if href == "" or href == "#":
            continue
        link_length += dom.text_length(anchor)
    return link_length / text_length


def base_score(node: Tag, settings: Settings) -> float:
    """Initial score of a container, before any paragraph contributes."""
    score = class_weight(node, settings) + TAG_BONUSES.get(dom.tag_name(node), 0)
    if dom.has_attr(node, "itemscope"):
        score += ITEMSCOPE_BONUS
    if dom.has_attr(node, "itemtype"):
        score += ITEMTYPE_BONUS
    return float(score)


def content_increment(text: str) -> float:
    """Score a paragraph contributes to its containers."""
    return 1.0 + count_commas(text) + min(len(text) // 100, 3)


@dataclass
class Candidate:
    """A container node and its accumulated score."""

    node: Tag
    score: float = 0.0


class CandidateMap:
    """Candidates keyed by node identity, in order of first reference."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._candidates: dict[int, Candidate] = {}

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates.values())

    def __contains__(self, node: Tag) -> bool:
        return id(node) in self._candidates

    def get(self, node: Tag) -> Optional[Candidate]:
        return self._candidates.get(id(node))

    def ensure(self, node: Tag) -> Candidate:
        """Return the node's candidate, creating it with its base score."""
        candidate = self._candidates.get(id(node))
        if candidate is None:
            candidate = Candidate(node, base_score(node, self.settings))
            self._candidates[id(node)] = candidate
        return candidate


def score_candidates(root: BeautifulSoup, settings: Settings) -> CandidateMap:
    """Score every container of a long enough <p> or <td>.

    A paragraph's increment goes in full to its parent and at half weight to
    its grandparent. Final scores are scaled down by link density.
    """
    candidates = CandidateMap(settings)

    for paragraph in dom.elements(root, ["p", "td"]):
        text = dom.inner_text(paragraph)
        if len(text) < settings.min_text_length:
            continue

        parent = paragraph.parent
        if not dom.is_element(parent):
            continue
        grandparent = parent.parent if dom.is_element(parent.parent) else None

        increment = content_increment(text)
        candidates.ensure(parent).score += increment
        if grandparent is not None:
            candidates.ensure(grandparent).score += increment / 2.0

    for candidate in candidates:
        candidate.score *= 1 - link_density(candidate.node)

    logger.debug(f"[EXTRACT] Scored {len(candidates)} candidates")
    return candidates
