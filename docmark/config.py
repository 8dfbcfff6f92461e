from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "docmark.yml"


class MarkdownConfig(BaseModel):
    """Options for the Markdown render function, fixed once loaded."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    parser: str = Field(
        default="marked",
        description="Markdown parser name or one of its deprecated aliases.",
    )
    highlight: bool | str = Field(
        default=False,
        description="Enable code highlighting (true) or name a highlighter backend.",
    )
    hardwrap: bool = Field(
        default=False,
        description="Treat single line breaks as <br> instead of joining lines.",
    )
    id_in_headings: bool = Field(
        default=False,
        alias="idInHeadings",
        description="Emit an id attribute on rendered headings.",
    )

    @field_validator("parser", mode="before")
    def _default_parser(cls, value: Any) -> Any:
        if value is None or value == "":
            return "marked"
        return value

    @field_validator("highlight", mode="before")
    def _normalize_highlight(cls, value: Any) -> Any:
        if value is None:
            return False
        return value


class Config(BaseModel):
    project_name: str = Field(default="Docmark Project")
    source_dir: Path = Field(default=Path("docs"))
    output_dir: Path = Field(default=Path("out"))
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)

    @field_validator("source_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("markdown", mode="before")
    def _empty_markdown_section(cls, value: Any) -> Any:
        # A bare ``markdown:`` key in YAML loads as None.
        if value is None:
            return {}
        return value


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/project/docmark.yml``) or a
    directory containing that file. JSON files are accepted as well since JSON is
    valid YAML. Relative paths inside the configuration are interpreted relative to
    the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_mapping(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_mapping(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs_required(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.source_dir = _abs_required(cfg.source_dir)
    cfg.output_dir = _abs_required(cfg.output_dir)
    return cfg


def _read_mapping(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} should define a mapping.")
    return data
