"""docmark: Markdown rendering for documentation generators.

Most callers only need :func:`get_parser`, which builds a render function from
a :class:`~docmark.config.Config` (or its ``markdown`` section), and
:func:`load_config` to read that configuration from ``docmark.yml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as load_pkg_version

from .config import Config, MarkdownConfig, load_config
from .markdown import MarkdownRenderer, escape_code, get_parser, render_markdown

__all__ = [
    "Config",
    "MarkdownConfig",
    "MarkdownRenderer",
    "__version__",
    "escape_code",
    "get_parser",
    "load_config",
    "render_markdown",
]

try:
    __version__ = load_pkg_version("docmark")
except PackageNotFoundError:
    # Running from a source checkout without an install.
    __version__ = "0.0.0+local"
