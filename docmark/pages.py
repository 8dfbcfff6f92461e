"""Render Markdown documents from the source tree into HTML fragments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .config import Config
from .markdown import MarkdownRenderer, get_parser, render_markdown

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


@dataclass(slots=True)
class RenderedPage:
    """A Markdown source and the HTML file written for it."""

    source: Path
    output: Path


def collect_sources(source_dir: Path) -> list[Path]:
    if not source_dir.exists():
        logger.warning("Source directory %s does not exist; nothing to render.", source_dir)
        return []
    return sorted(
        path
        for path in source_dir.rglob("*")
        if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES
    )


def write_pages(config: Config, sources: Iterable[Path] | None = None) -> list[RenderedPage]:
    """Render every Markdown source under ``config.source_dir`` into ``config.output_dir``.

    The directory layout of the source tree is mirrored. When the configured
    parser is unknown the Markdown text is written through unrendered.
    """
    renderer: MarkdownRenderer | None = get_parser(config)
    source_root = config.source_dir
    pages: list[RenderedPage] = []

    for source in sources if sources is not None else collect_sources(source_root):
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to read %s: %s", source, exc)
            continue

        relative = source.relative_to(source_root) if source.is_relative_to(source_root) else Path(source.name)
        target = (config.output_dir / relative).with_suffix(".html")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_markdown(text, renderer) + "\n", encoding="utf-8")
        pages.append(RenderedPage(source=source, output=target))

    return pages
