"""Text transforms that protect documentation syntax from the Markdown engine.

Inline tags such as ``{@link module_name}`` and bare URLs are escaped before
rendering and restored afterwards. The pre-render and post-render steps are
applied by :class:`docmark.markdown.renderer.MarkdownRenderer` in a fixed
order; each transform is also usable on its own.
"""

from __future__ import annotations

import re

INLINE_TAG_RE = re.compile(r"\{@[^}\r\n]+\}")
_UNESCAPED_UNDERSCORE_RE = re.compile(r"(?<!\\)_")
_URL_SCHEME_RE = re.compile(r"(https?)://")
# The engine percent-encodes backslashes in link targets.
_ESCAPED_URL_SCHEME_RE = re.compile(r"(https?):(?:\\/\\/|%5C/%5C/)")


def escape_underscores(source: str) -> str:
    """Backslash-escape underscores inside ``{@...}`` tags.

    Underscores already preceded by a backslash are left alone. The engine
    strips the backslash again, so tag names keep their literal underscores
    instead of turning into emphasis.
    """
    return INLINE_TAG_RE.sub(
        lambda match: _UNESCAPED_UNDERSCORE_RE.sub(r"\\_", match.group(0)),
        source,
    )


def escape_urls(source: str) -> str:
    """Escape the slashes of HTTP/HTTPS URLs so they are not autolinked."""
    return _URL_SCHEME_RE.sub(r"\1:\\/\\/", source)


def unescape_urls(source: str) -> str:
    """Reverse :func:`escape_urls` once Markdown rendering is complete."""
    return _ESCAPED_URL_SCHEME_RE.sub(r"\1://", source)


def unencode_apostrophes(source: str) -> str:
    return source.replace("&#39;", "'")


def unencode_quotes(source: str) -> str:
    """Turn ``&quot;`` back into ``"`` inside ``{@...}`` tags.

    Quotes cannot be escaped before rendering because the entity only appears
    in the engine's output.
    """
    return INLINE_TAG_RE.sub(lambda match: match.group(0).replace("&quot;", '"'), source)


def escape_code(source: str) -> str:
    """Escape text that will be embedded verbatim inside an HTML code block."""
    return (
        source.replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
