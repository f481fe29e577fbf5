"""Article title resolution."""

from bs4 import BeautifulSoup

from . import dom

TITLE_SEPARATORS = (" | ", " _ ", " - ", "«", "»", "—")

# A refined title must be longer than this to replace the raw one
MIN_REFINED_TITLE_LENGTH = 10


def _raw_title(root: BeautifulSoup) -> str:
    for meta in root.find_all("meta"):
        if dom.attr(meta, "property") == "og:title" or dom.attr(meta, "name") == "twitter:title":
            return dom.attr(meta, "content")
    title = root.find("title")
    return dom.inner_text(title) if title is not None else ""


def resolve_title(root: BeautifulSoup) -> str:
    """Pick the display title of a document.

    Meta titles (og:title, twitter:title) win over ``<title>``. The raw title
    is then split on the known site-name separators; the leading segment is
    used when exactly one separator matched and the segment is long enough.
    If several separators match, the split is ambiguous and the raw title is
    kept.
    """
    title = _raw_title(root)

    refined = ""
    for sep in TITLE_SEPARATORS:
        parts = title.split(sep)
        if len(parts) > 1:
            if refined:
                refined = title
                break
            refined = parts[0].strip()

    if len(refined) > MIN_REFINED_TITLE_LENGTH:
        return refined
    return title
