"""Markup parsers used by the crawler.

Two variants share the :class:`MarkupParser` interface:

* :class:`StrictMarkupParser` – expects usable HTML and raises
  :class:`~docs_loader.errors.ParseError` when the input yields no elements.
* :class:`LenientMarkupParser` – best effort; cleans the input before parsing
  and always returns a tree (possibly one wrapping plain text).

Both return a :class:`bs4.BeautifulSoup` so the extractors work on either.
"""
from __future__ import annotations

import html
import re
from collections.abc import Sequence
from typing import Protocol, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from docs_loader.errors import ParseError

__all__: Sequence[str] = ("MarkupParser", "StrictMarkupParser", "LenientMarkupParser", "get_parser")

_MarkupT = Union[str, bytes]

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")
_MARKED_SECTION_RE = re.compile(r"<!\[(?!CDATA\[).*?\]>", re.DOTALL)


class MarkupParser(Protocol):
    def parse(self, markup: _MarkupT) -> BeautifulSoup: ...


def _as_text(markup: _MarkupT) -> str:
    if isinstance(markup, bytes):
        return markup.decode("utf-8", errors="replace")
    return markup


class StrictMarkupParser:
    """Parses well-formed HTML; refuses input without any element."""

    def parse(self, markup: _MarkupT) -> BeautifulSoup:
        try:
            soup = BeautifulSoup(_as_text(markup), "html.parser")
        except ParserRejectedMarkup as exc:
            raise ParseError(f"markup rejected: {exc}") from exc
        if soup.find() is None:
            raise ParseError("markup contains no elements")
        return soup


class LenientMarkupParser:
    """Best-effort parser: strips what ``html.parser`` chokes on before parsing."""

    def parse(self, markup: _MarkupT) -> BeautifulSoup:
        text = _CONTROL_CHARS_RE.sub("", _as_text(markup))
        text = _MARKED_SECTION_RE.sub("", text)
        soup = BeautifulSoup(text, "html.parser")
        if soup.find() is None and text.strip():
            # plain text body: keep it as a single paragraph
            soup = BeautifulSoup(f"<body><p>{html.escape(text.strip())}</p></body>", "html.parser")
        return soup


def get_parser(name: str) -> MarkupParser:
    """Return the parser variant configured by name (``lenient`` or ``strict``)."""
    if name == "strict":
        return StrictMarkupParser()
    if name == "lenient":
        return LenientMarkupParser()
    raise ValueError(f"Unknown parser variant: {name}")
