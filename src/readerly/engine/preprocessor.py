"""Document cleanup run before scoring."""

import logging

from bs4 import BeautifulSoup, Tag

from ..config import Settings
from . import dom

logger = logging.getLogger(__name__)

ALWAYS_REMOVED_TAGS = {"script", "style", "noscript"}
NEVER_UNLIKELY_TAGS = {"html", "body", "article"}

# Tags whose presence under a <div> means the div is not a plain paragraph
BLOCK_LEVEL_TAGS = ["a", "blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul", "select"]


def _starts_br_run(node) -> bool:
    """True if ``node`` is a <br> directly followed by another <br>."""
    return dom.tag_name(node) == "br" and dom.tag_name(dom.next_significant_sibling(node)) == "br"


def collapse_br_runs(root: BeautifulSoup) -> int:
    """Turn runs of two or more <br> into paragraphs.

    The first <br> of a run is replaced by a new <p>, the rest of the run is
    deleted and the following siblings, up to the next run, move into the
    new paragraph.

    Returns:
        Number of paragraphs created
    """
    created = 0
    for br in dom.elements(root, "br"):
        if dom.is_removed(br) or br.parent is None or not _starts_br_run(br):
            continue

        node = dom.next_significant_sibling(br)
        while dom.tag_name(node) == "br":
            following = dom.next_significant_sibling(node)
            dom.remove(node)
            node = following

        paragraph = dom.new_tag(root, "p")
        dom.replace(br, paragraph)
        dom.remove(br)

        sibling = paragraph.next_sibling
        while sibling is not None and not _starts_br_run(sibling):
            following = sibling.next_sibling
            paragraph.append(sibling)
            sibling = following

        while paragraph.contents and dom.is_whitespace(paragraph.contents[0]):
            dom.detach(paragraph.contents[0])
        while paragraph.contents and dom.is_whitespace(paragraph.contents[-1]):
            dom.detach(paragraph.contents[-1])

        if dom.tag_name(paragraph.parent) == "p":
            dom.rename(paragraph.parent, "div")
        created += 1

    return created


def _is_unlikely(node: Tag, settings: Settings) -> bool:
    match_string = dom.attr(node, "class") + dom.attr(node, "id")
    if not match_string:
        return False
    if settings.blacklist_pattern.search(match_string):
        return True
    return bool(
        settings.unlikely_pattern.search(match_string)
        and not settings.maybe_candidate_pattern.search(match_string)
    )


def remove_unlikely_candidates(root: BeautifulSoup, settings: Settings) -> int:
    """Remove scripts, styles and elements whose class/id reads as boilerplate.

    Returns:
        Number of subtrees removed
    """
    removed = 0
    for node in dom.elements(root):
        if dom.is_removed(node):
            continue
        name = dom.tag_name(node)
        if name in ALWAYS_REMOVED_TAGS:
            dom.remove(node)
            removed += 1
        elif name not in NEVER_UNLIKELY_TAGS and _is_unlikely(node, settings):
            logger.debug(
                f"[EXTRACT] Removing unlikely candidate <{name}> "
                f"class={dom.attr(node, 'class')!r} id={dom.attr(node, 'id')!r}"
            )
            dom.remove(node)
            removed += 1
    return removed


def _single_paragraph(div: Tag) -> Tag | None:
    """The div's only <p> descendant, if there is exactly one and it has text."""
    paragraphs = div.find_all("p")
    if len(paragraphs) != 1 or not dom.inner_text(paragraphs[0]).strip():
        return None
    return paragraphs[0]


def _loose_text(div: Tag) -> list:
    """Non-blank text under ``div`` that no <p> or nested <div> encloses."""
    found = []
    for node in div.descendants:
        if not dom.is_text(node) or not node.strip():
            continue
        container = node.parent
        while container is not div and dom.tag_name(container) not in ("p", "div"):
            container = container.parent
        if container is div:
            found.append(node)
    return found


def normalize_divs(root: BeautifulSoup) -> tuple[int, int, int]:
    """Rewrite divs so paragraph-like content is spelled as <p>.

    Each div, in document order, is either replaced by its single paragraph
    (anything else the div held goes with it), renamed to <p> when it holds
    no block-level elements, or has its loose text wrapped in synthetic
    paragraphs. Text inside a nested div is left for that div's own turn.

    Returns:
        Counts of (lifted, renamed, wrapped) operations
    """
    lifted = renamed = wrapped = 0
    for div in dom.elements(root, "div"):
        if dom.is_removed(div) or div.parent is None or dom.tag_name(div) != "div":
            continue

        paragraph = _single_paragraph(div)
        if paragraph is not None:
            dom.replace(div, paragraph)
            dom.remove(div)
            lifted += 1
        elif div.find(BLOCK_LEVEL_TAGS) is None:
            dom.rename(div, "p")
            renamed += 1
        else:
            for text in _loose_text(div):
                wrapper = dom.new_tag(root, "p")
                dom.mark_synthetic(wrapper)
                dom.wrap(text, wrapper)
                wrapped += 1
    return lifted, renamed, wrapped


def preprocess(root: BeautifulSoup, settings: Settings) -> None:
    """Run all cleanup passes over the document, in order."""
    paragraphs = collapse_br_runs(root)
    removed = remove_unlikely_candidates(root, settings)
    lifted, renamed, wrapped = normalize_divs(root)
    logger.debug(
        f"[EXTRACT] Preprocessed: {paragraphs} <br> runs collapsed, {removed} subtrees removed, "
        f"{lifted} divs lifted, {renamed} renamed, {wrapped} text nodes wrapped"
    )
