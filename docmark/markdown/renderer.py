"""Build Markdown render functions for documentation comments."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable, Sequence

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from ..config import Config, MarkdownConfig
from .escaping import (
    escape_underscores,
    escape_urls,
    unencode_apostrophes,
    unencode_quotes,
    unescape_urls,
)
from .highlight import Highlighter, create_highlighter
from .names import ParserName, resolve_highlighter, resolve_parser

if TYPE_CHECKING:
    from markdown_it.token import Token
    from markdown_it.utils import EnvType, OptionsDict

logger = logging.getLogger(__name__)

SOURCE_CLASS = "source"
_SLUG_SEPARATOR_RE = re.compile(r"[^\w]+")

RenderRule = Callable[["Sequence[Token]", int, "OptionsDict", "EnvType"], str]


class MarkdownRenderer:
    """Render function closed over one Markdown configuration.

    Instances are callable with a single Markdown string and return HTML. The
    engine and highlighter are chosen at construction and never change.
    """

    def __init__(self, config: MarkdownConfig, parser: ParserName = ParserName.MARKED) -> None:
        self.config = config
        self.parser = parser
        self.highlighter = _build_highlighter(config.highlight)
        self._md = _build_engine(config, self.highlighter)

    def __call__(self, source: str) -> str:
        return self.render(source)

    def render(self, source: str) -> str:
        text = escape_underscores(source)
        text = escape_urls(text)

        result = self._md.render(text).rstrip()
        result = unencode_apostrophes(result)
        result = unescape_urls(result)
        return unencode_quotes(result)


def get_parser(config: Config | MarkdownConfig | None = None) -> MarkdownRenderer | None:
    """Return a Markdown render function for ``config``.

    Accepts the project configuration, its ``markdown`` section, or nothing for
    the defaults. Returns None when the configured parser is not recognized; in
    that case Markdown support is disabled and callers should pass text through
    unchanged.
    """
    if config is None:
        settings = MarkdownConfig()
    elif isinstance(config, Config):
        settings = config.markdown
    else:
        settings = config

    parser = resolve_parser(settings.parser)
    if parser is None:
        logger.error(
            'Unrecognized Markdown parser "%s". Markdown support is disabled.', settings.parser
        )
        return None
    return MarkdownRenderer(settings, parser)


def slugify_heading(title: str) -> str:
    return _SLUG_SEPARATOR_RE.sub("-", title.lower())


def _build_highlighter(setting: bool | str) -> Highlighter | None:
    if not setting:
        return None
    name = resolve_highlighter(setting)
    if name is None:
        logger.error('Unrecognized code block highlighter "%s". Highlighting disabled.', setting)
        return None
    return create_highlighter(name)


def _build_engine(config: MarkdownConfig, highlighter: Highlighter | None) -> MarkdownIt:
    options: dict[str, object] = {"html": True, "linkify": True, "breaks": config.hardwrap}
    if highlighter is not None:
        options["highlight"] = lambda code, lang, _attrs: highlighter(code, lang)

    md = MarkdownIt("commonmark", options)
    md.enable(["table", "strikethrough", "linkify"])
    # Only scheme-qualified URLs become links; escaped ones are restored as text.
    md.linkify.set({"fuzzy_link": False})
    md.use(tasklists_plugin)
    if config.id_in_headings:
        md.use(anchors_plugin, max_level=6, slug_func=slugify_heading)

    md.add_render_rule("fence", _with_source_class(md.renderer.rules["fence"]))
    md.add_render_rule("code_block", _with_source_class(md.renderer.rules["code_block"]))
    return md


def _with_source_class(render_default: RenderRule) -> Callable[..., str]:
    """Wrap a default code rule so its ``<pre>`` tag carries the source class."""

    def render(
        self: object,
        tokens: Sequence[Token],
        idx: int,
        options: OptionsDict,
        env: EnvType,
    ) -> str:
        html = render_default(tokens, idx, options, env)
        return html.replace("<pre>", f'<pre class="{SOURCE_CLASS}">', 1)

    return render
