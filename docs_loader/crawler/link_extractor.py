"""
Link extraction for DocsLoader: resolve hrefs and keep in-origin targets.
"""
from __future__ import annotations

from typing import List, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from docs_loader.logger import logger
from docs_loader.utils import normalize_url, remove_duplicates, same_origin

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def resolve_href(href: str, current_url: str, origin: str) -> str:
    """
    Make *href* absolute.

    ``/path`` resolves against the origin root, other relative references
    against the directory of *current_url*.
    """
    if href.startswith("//"):
        return urljoin(current_url, href)
    if href.startswith("/"):
        return urljoin(origin.rstrip("/") + "/", href)
    # "." strips the last segment and any query, so "?page=2" lands in the directory too
    return urljoin(urljoin(current_url, "."), href)


def partition_links(soup: BeautifulSoup, current_url: str, origin: str) -> Tuple[List[str], List[str]]:
    """
    Split the hyperlinks of *soup* into (accepted, ignored).

    Accepted links are absolute, normalized, in-origin and carry no fragment
    marker. Both lists are deduplicated and keep document order.
    """
    accepted: List[str] = []
    ignored: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIPPED_SCHEMES):
            continue
        absolute = resolve_href(raw, current_url, origin)
        if "#" in absolute or not same_origin(absolute, origin):
            ignored.append(absolute)
            continue
        accepted.append(normalize_url(absolute))
    accepted = remove_duplicates(accepted)
    ignored = remove_duplicates(ignored)
    if ignored:
        logger.debug("Ignored %d links on %s", len(ignored), current_url)
    return accepted, ignored


def extract_links(soup: BeautifulSoup, current_url: str, origin: str) -> List[str]:
    """Return the deduplicated in-origin links of *soup*."""
    return partition_links(soup, current_url, origin)[0]
