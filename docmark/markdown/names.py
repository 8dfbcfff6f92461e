"""Parser and highlighter name registry."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ParserName(str, Enum):
    """Markdown parsers that are available."""

    MARKED = "marked"


class HighlighterName(str, Enum):
    """Code block highlighters that are available."""

    HIGHLIGHT_JS = "highlight.js"
    PYGMENTIZE = "pygmentize"


# "evilstreak" (markdown-js) and "gfm" are deprecated aliases for "marked".
PARSER_NAMES: Mapping[str, ParserName] = MappingProxyType(
    {
        "evilstreak": ParserName.MARKED,
        "gfm": ParserName.MARKED,
        "marked": ParserName.MARKED,
    }
)

HIGHLIGHTER_NAMES: Mapping[str, HighlighterName] = MappingProxyType(
    {
        "hljs": HighlighterName.HIGHLIGHT_JS,
        "highlight.js": HighlighterName.HIGHLIGHT_JS,
        "highlightjs": HighlighterName.HIGHLIGHT_JS,
        "pygmentize-bundled": HighlighterName.PYGMENTIZE,
        "pygmentize": HighlighterName.PYGMENTIZE,
    }
)

DEFAULT_HIGHLIGHTER = HighlighterName.HIGHLIGHT_JS


def resolve_parser(name: str) -> ParserName | None:
    """Return the canonical parser for ``name``, or None when it is unknown."""
    return PARSER_NAMES.get(name)


def resolve_highlighter(value: bool | str | None) -> HighlighterName | None:
    """Return the canonical highlighter for a ``highlight`` setting.

    ``True`` selects the default backend. Falsy settings and unknown names both
    return None; callers distinguish the two when deciding whether to report.
    """
    if value is True:
        return DEFAULT_HIGHLIGHTER
    if not value or not isinstance(value, str):
        return None
    return HIGHLIGHTER_NAMES.get(value)
