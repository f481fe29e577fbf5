"""Tree access helpers over BeautifulSoup documents.

Every mutation the engine performs goes through this module. The helpers wrap
BeautifulSoup primitives that update parent, sibling and child links in one
call, so a node is never reachable from one side of a link only.

Removed nodes are decomposed. Passes that iterate over a snapshot of the tree
must skip nodes for which ``is_removed`` is true before touching them.
"""

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

SYNTHETIC_ATTR = "data-readerly-synthetic"


def is_element(node: PageElement | None) -> bool:
    """True for an element node (the document object itself is not one)."""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def tag_name(node: PageElement | None) -> str:
    """Lowercase tag name of an element, empty string for anything else."""
    return node.name.lower() if is_element(node) else ""


def is_removed(node: PageElement) -> bool:
    return bool(getattr(node, "decomposed", False))


def is_text(node: PageElement | None) -> bool:
    """True for a text node (comments, doctypes and the like are not text)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_whitespace(node: PageElement | None) -> bool:
    """True for a text node holding only whitespace."""
    return is_text(node) and not node.strip()


def attr(node: Tag, key: str) -> str:
    """Attribute value, or an empty string if the attribute is missing."""
    value = node.get(key)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


def has_attr(node: Tag, key: str) -> bool:
    return is_element(node) and node.has_attr(key)


def inner_text(node: PageElement) -> str:
    """Concatenated text of all descendant text nodes, comments excluded."""
    if isinstance(node, Tag):
        return node.get_text()
    if isinstance(node, PreformattedString):
        return ""
    return str(node)


def text_length(node: PageElement) -> int:
    """Length of ``inner_text`` in code points."""
    return len(inner_text(node))


def elements(node: Tag, names=None, include_self: bool = False) -> list[Tag]:
    """Snapshot of element descendants in document order.

    Args:
        node: Subtree root
        names: Optional tag name or list of tag names to filter on
        include_self: Also consider ``node`` itself (listed first)
    """
    found = list(node.find_all(names if names else True))
    if include_self and is_element(node):
        if not names or tag_name(node) in ([names] if isinstance(names, str) else names):
            found.insert(0, node)
    return found


def next_significant_sibling(node: PageElement) -> PageElement | None:
    """Next sibling, skipping whitespace-only text nodes."""
    sibling = node.next_sibling
    while sibling is not None and is_whitespace(sibling):
        sibling = sibling.next_sibling
    return sibling


def element_children(node: Tag) -> list[Tag]:
    return [child for child in node.children if is_element(child)]


def new_tag(root: BeautifulSoup, name: str) -> Tag:
    return root.new_tag(name)


def remove(node: PageElement) -> None:
    """Detach a node from the tree and destroy its subtree."""
    if is_removed(node):
        return
    node.decompose()


def detach(node: PageElement) -> PageElement:
    """Detach a node from the tree, keeping it usable."""
    return node.extract()


def replace(old: PageElement, new: PageElement) -> None:
    """Put ``new`` in the place of ``old``; ``new`` is moved if already in a tree."""
    old.replace_with(new)


def rename(node: Tag, name: str) -> None:
    node.name = name


def wrap(node: PageElement, wrapper: Tag) -> Tag:
    return node.wrap(wrapper)


def mark_synthetic(node: Tag) -> None:
    """Flag a paragraph the engine created around bare text."""
    node[SYNTHETIC_ATTR] = ""


def is_synthetic(node: PageElement) -> bool:
    return has_attr(node, SYNTHETIC_ATTR)
