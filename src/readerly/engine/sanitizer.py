"""Cleanup and serialization of the selected content."""

import html
import logging
from typing import Optional

from bs4 import Tag
from bs4.element import PageElement

from ..config import Settings
from ..utils import normalize_whitespace, resolve_url
from . import dom
from .scoring import CLASS_WEIGHT, class_weight, count_commas, link_density

logger = logging.getLogger(__name__)

HEADER_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
HEADER_MAX_LINK_DENSITY = 0.33

INTERACTIVE_TAGS = ["input", "select", "textarea", "button", "object", "iframe", "embed"]

CONDITIONAL_TAGS = ["table", "ul", "div"]

VOID_TAGS = {
    "area", "base", "br", "embed", "hr", "iframe", "img", "input",
    "link", "meta", "param", "source", "track",
}

# Elements that are unwrapped on output but still break the text flow
BLOCK_BOUNDARY_TAGS = {
    "address", "article", "aside", "blockquote", "dd", "dl", "dt", "figcaption",
    "footer", "header", "li", "main", "ol", "pre", "section", "table", "td",
    "th", "tr", "ul",
}

# (tag, attribute) pairs holding a URL to make absolute
URL_ATTRIBUTES = {("img", "src"), ("a", "href"), ("embed", "src")}

MIN_COMMAS_TO_KEEP = 10
MAX_LIST_ITEMS_OVER_PARAGRAPHS = 100
MAX_SHORT_EMBED_LENGTH = 75


def clean_headers_and_widgets(node: Tag, settings: Settings) -> int:
    """Drop boilerplate headers and interactive or embedded elements.

    Returns:
        Number of elements removed
    """
    removed = 0
    for element in dom.elements(node, HEADER_TAGS + INTERACTIVE_TAGS, include_self=True):
        if dom.is_removed(element):
            continue
        if dom.tag_name(element) in HEADER_TAGS:
            if (
                class_weight(element, settings) >= 0
                and link_density(element) <= HEADER_MAX_LINK_DENSITY
            ):
                continue
        dom.remove(element)
        removed += 1
    return removed


def removal_reason(node: Tag, settings: Settings) -> Optional[str]:
    """Why a table, list or div looks like boilerplate, or None to keep it."""
    weight = class_weight(node, settings)
    if weight < 0:
        return f"negative class weight ({weight})"

    text = dom.inner_text(node)
    if count_commas(text) >= MIN_COMMAS_TO_KEEP:
        return None

    paragraphs = len(node.find_all(["p", "br"]))
    images = len(node.find_all("img"))
    list_items = len(node.find_all("li")) - MAX_LIST_ITEMS_OVER_PARAGRAPHS
    embeds = len(node.find_all("embed", src=True))
    inputs = len(node.find_all("input"))

    content_length = len(text.strip())
    density = link_density(node)

    if images > paragraphs and images > 1:
        return "too many images"
    if list_items > paragraphs and dom.tag_name(node) not in ("ul", "ol"):
        return "more list items than paragraphs"
    if inputs > paragraphs / 3:
        return "too many inputs for its paragraphs"
    if content_length < settings.min_text_length and (images == 0 or images > 2):
        return "too short content length without a single image"
    if weight < CLASS_WEIGHT and density > 0.2:
        return f"too many links for its weight ({weight})"
    if weight >= CLASS_WEIGHT and density > 0.5:
        return f"too many links for its weight ({weight})"
    if (embeds == 1 and content_length < MAX_SHORT_EMBED_LENGTH) or embeds > 1:
        return "<embed>s with too short a content length, or too many <embed>s"
    return None


def clean_conditionally(node: Tag, settings: Settings, tags=None) -> int:
    """Remove tables, lists and divs that fail the content heuristics.

    Returns:
        Number of elements removed
    """
    removed = 0
    for element in dom.elements(node, tags or CONDITIONAL_TAGS, include_self=True):
        if dom.is_removed(element):
            continue
        reason = removal_reason(element, settings)
        if reason is None:
            continue
        logger.debug(
            f"[CLEAN] Conditionally cleaned <{dom.tag_name(element)}> "
            f"id={dom.attr(element, 'id')!r} class={dom.attr(element, 'class')!r} because of {reason}"
        )
        dom.remove(element)
        removed += 1
    return removed


def _serialize(node: PageElement, out: list[str], settings: Settings, base_url: Optional[str]) -> None:
    # Plain strings on the stack are closing markup, pushed before the children
    stack: list = [node]
    while stack:
        item = stack.pop()
        if not isinstance(item, PageElement):
            out.append(item)
            continue
        if dom.is_text(item):
            out.append(html.escape(str(item), quote=False))
            continue
        if not isinstance(item, Tag):
            continue

        name = dom.tag_name(item)
        emit = name in settings.allowed_tags and not dom.is_synthetic(item)

        closing = ""
        if emit:
            out.append(f"<{name}")
            for key, value in item.attrs.items():
                if key not in settings.allowed_attrs:
                    continue
                if isinstance(value, (list, tuple)):
                    value = " ".join(value)
                if (name, key) in URL_ATTRIBUTES:
                    value = resolve_url(value, base_url)
                out.append(f' {key}="{html.escape(value)}"')
            if name in VOID_TAGS:
                out.append("/>")
                continue
            out.append(">")
            closing = f"</{name}>"
        elif name in BLOCK_BOUNDARY_TAGS:
            out.append("\n")
            closing = "\n"

        if closing:
            stack.append(closing)
        stack.extend(reversed(item.contents))


def serialize(nodes: list[Tag], settings: Settings, base_url: Optional[str] = None) -> str:
    """Render nodes keeping only allowed tags and attributes.

    Disallowed elements and synthetic paragraphs are unwrapped: their
    children are rendered without the enclosing tag.
    """
    out: list[str] = []
    for node in nodes:
        _serialize(node, out, settings, base_url)
    return "".join(out)


def sanitize(nodes: list[Tag], settings: Settings, base_url: Optional[str] = None) -> str:
    """Clean up the selected nodes and serialize them.

    Falls back to the raw markup of the selection if nothing survives.
    """
    raw = "".join(str(node) for node in nodes)

    removed = 0
    for node in nodes:
        if not dom.is_removed(node):
            removed += clean_headers_and_widgets(node, settings)
    cleaned = 0
    for node in nodes:
        if not dom.is_removed(node):
            cleaned += clean_conditionally(node, settings)
    logger.debug(f"[CLEAN] Removed {removed} headers/widgets, {cleaned} conditionally")

    survivors = [node for node in nodes if not dom.is_removed(node)]
    content = normalize_whitespace(serialize(survivors, settings, base_url)).strip()
    if not content:
        logger.debug("[CLEAN] Nothing left after sanitizing, using raw selection")
        return normalize_whitespace(raw).strip()
    return content
