"""Markdown rendering for documentation comments."""

from __future__ import annotations

from .escaping import escape_code, escape_underscores, escape_urls, unencode_quotes, unescape_urls
from .highlight import HighlightError, HighlighterUnavailableError
from .names import (
    HIGHLIGHTER_NAMES,
    PARSER_NAMES,
    HighlighterName,
    ParserName,
    resolve_highlighter,
    resolve_parser,
)
from .renderer import MarkdownRenderer, get_parser

__all__ = [
    "HIGHLIGHTER_NAMES",
    "PARSER_NAMES",
    "HighlightError",
    "HighlighterName",
    "HighlighterUnavailableError",
    "MarkdownRenderer",
    "ParserName",
    "escape_code",
    "escape_underscores",
    "escape_urls",
    "get_parser",
    "render_markdown",
    "resolve_highlighter",
    "resolve_parser",
    "unencode_quotes",
    "unescape_urls",
]


def render_markdown(text: str, renderer: MarkdownRenderer | None) -> str:
    """Render ``text`` with ``renderer``, passing it through when rendering is disabled."""
    if renderer is None:
        return text
    if not text.strip():
        return ""
    return renderer(text)
