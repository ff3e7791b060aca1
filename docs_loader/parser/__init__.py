"""docs_loader.parser: markup parsing and text extraction."""

from docs_loader.parser.content_extractor import extract_content
from docs_loader.parser.markup import LenientMarkupParser, MarkupParser, StrictMarkupParser, get_parser

__all__ = ["extract_content", "LenientMarkupParser", "MarkupParser", "StrictMarkupParser", "get_parser"]
