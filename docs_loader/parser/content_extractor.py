"""Conversion of a parsed page into a flat, markdown-like text document.

The output is built in three passes over the content region:

1. a ``# title`` line from the first ``<h1>`` (or ``<title>``);
2. every heading, ``#`` repeated by its level, each distinct text once;
3. paragraphs, list items (``- item``) and code blocks (`` `code` ``).

The input tree is never modified; boilerplate is removed from a copy.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Set, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("extract_content",)

_BOILERPLATE_TAGS = ["script", "style", "noscript", "template", "nav", "header", "footer", "aside"]
_BOILERPLATE_SELECTOR = ".sidebar, .navigation"
_MAIN_SELECTOR = "main, article, .content, .docs-content"
_HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_BLOCKS = ["p", "li", "pre", "code"]


def _clean(tag: Tag) -> str:
    return " ".join(tag.get_text().split())


def _strip_boilerplate(soup: BeautifulSoup) -> None:
    for element in soup.find_all(_BOILERPLATE_TAGS) + soup.select(_BOILERPLATE_SELECTOR):
        # nested matches are gone with their ancestor
        if not element.decomposed:
            element.decompose()


def _find_title(soup: BeautifulSoup) -> str:
    heading = soup.find("h1")
    title = _clean(heading) if isinstance(heading, Tag) else ""
    if not title:
        title_tag = soup.find("title")
        title = _clean(title_tag) if isinstance(title_tag, Tag) else ""
    return title


def _render_block(tag: Tag) -> str:
    if tag.name == "pre":
        text = tag.get_text().strip()
    else:
        text = _clean(tag)
    if not text:
        return ""
    if tag.name == "li":
        return f"- {text}\n"
    if tag.name in ("pre", "code"):
        return f"`{text}`\n\n"
    return f"{text}\n\n"


def extract_content(soup: BeautifulSoup) -> str:
    """Return the text document for *soup*; empty string if nothing is left."""
    page = BeautifulSoup(str(soup), "html.parser")
    _strip_boilerplate(page)

    region: Union[Tag, BeautifulSoup] = page.select_one(_MAIN_SELECTOR) or page.body or page

    parts: List[str] = []
    seen_headings: Set[str] = set()

    title = _find_title(page)
    if title:
        parts.append(f"# {title}\n\n")
        seen_headings.add(title)

    for heading in region.find_all(_HEADINGS):
        text = _clean(heading)
        if not text or text in seen_headings:
            continue
        seen_headings.add(text)
        parts.append(f"{'#' * int(heading.name[1])} {text}\n\n")

    for block in region.find_all(_BLOCKS):
        if block.name == "code" and block.find_parent("pre") is not None:
            continue
        parts.append(_render_block(block))

    return "".join(parts)
