"""CLI entrypoints for docmark."""

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from .config import Config, load_config
from .markdown import (
    HIGHLIGHTER_NAMES,
    PARSER_NAMES,
    escape_code,
    get_parser,
    render_markdown,
)
from .pages import write_pages

console = Console()
app = typer.Typer(help="Render documentation Markdown with inline tags preserved.")

ConfigPathOption = Annotated[
    str,
    typer.Option(
        "--config",
        "-c",
        help="Path to a configuration file or a directory containing docmark.yml.",
    ),
]
SourceArgument = Annotated[
    str,
    typer.Argument(..., help="Markdown file to read, or '-' for standard input."),
]


@app.command()
def render(
    source: SourceArgument,
    config_path: ConfigPathOption = ".",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write HTML to this file instead of stdout."),
    ] = None,
) -> None:
    """Render a single Markdown file to HTML."""
    config = _load(config_path)
    text = _read_source(source)

    renderer = get_parser(config)
    if renderer is None:
        console.print(
            f"[bold yellow]Markdown disabled[/]: unknown parser '{config.markdown.parser}'; "
            "passing text through unchanged.",
            highlight=False,
        )
    html = render_markdown(text, renderer)

    if output is None:
        typer.echo(html)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html + "\n", encoding="utf-8")
    console.print(f"[bold green]Rendered[/]: {source} -> {output}", highlight=False)


@app.command()
def build(config_path: ConfigPathOption = ".") -> None:
    """Render every Markdown document under the configured source directory."""
    config = _load(config_path)
    pages = write_pages(config)

    if not pages:
        console.print(f"[bold yellow]Nothing to render[/]: no Markdown found in {config.source_dir}")
        raise typer.Exit()

    console.print(
        f"[bold green]Pages[/]: rendered {len(pages)} document(s) into {config.output_dir}",
        highlight=False,
    )


@app.command()
def parsers() -> None:
    """List parser and highlighter names with the implementation each selects."""
    table = Table(title="Markdown backends")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Resolves to")
    for name, parser in PARSER_NAMES.items():
        table.add_row("parser", name, parser.value)
    for name, highlighter in HIGHLIGHTER_NAMES.items():
        table.add_row("highlighter", name, highlighter.value)
    console.print(table)


@app.command()
def escape(source: SourceArgument) -> None:
    """Escape a code sample for verbatim inclusion in an HTML code block."""
    typer.echo(escape_code(_read_source(source)), nl=False)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Source file not found: {source}") from exc


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def main() -> None:
    app()


if __name__ == "__main__":
    main()
