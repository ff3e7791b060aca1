"""docs_loader.utils: URL helpers shared by the frontier, link extractor and writer."""

from __future__ import annotations

from typing import Collection, List, Sequence
from urllib.parse import ParseResult, urlparse, urlunparse

from docs_loader.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "origin_of",
    "same_origin",
    "remove_duplicates",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _netloc(parsed: ParseResult) -> str:
    """Lower-cased netloc without the scheme's default port."""
    netloc = parsed.netloc.lower()
    default = _DEFAULT_PORTS.get(parsed.scheme.lower())
    if default is not None and netloc.endswith(f":{default}"):
        netloc = netloc[: -len(f":{default}")]
    return netloc


def normalize_url(url: str) -> str:
    """Lower-cases scheme and host, drops a default port and turns an empty path into ``/``.

    Path, query and fragment are kept verbatim so that distinct pages never
    collapse into one.
    """
    parsed = urlparse(url.strip())
    path = parsed.path or "/"
    return urlunparse(
        (parsed.scheme.lower(), _netloc(parsed), path, parsed.params, parsed.query, parsed.fragment)
    )


def origin_of(url: str) -> str:
    """Returns ``scheme://host[:port]`` of *url*, lower-cased, default port omitted."""
    parsed = urlparse(url.strip())
    return f"{parsed.scheme.lower()}://{_netloc(parsed)}"


def same_origin(url: str, origin: str) -> bool:
    """Checks that *url* is an http(s) URL on *origin*."""
    parsed = urlparse(url)
    valid = parsed.scheme.lower() in ("http", "https") and origin_of(url) == origin_of(origin.rstrip("/"))
    logger.debug("URL in origin: %s -> %s", url, valid)
    return valid


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Removes duplicate URLs keeping the original order."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
