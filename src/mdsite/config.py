"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:     str = "mdsite"
    content_dir:  str = Field(default="content",     description="Root directory of content files")
    output_dir:   str = Field(default=".generated",  description="Directory for generated document JSON")
    db_url:       str = "sqlite:///mdsite.db"
    store:        bool = Field(default=True, description="Persist the build result to the document store")
    on_error:     str = Field(default="fail", pattern="^(fail|skip)$", description="fail: abort build; skip: drop bad files")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    theme:        str = Field(default="github-dark", description="Pygments style used for code blocks")
    fallback_language: Optional[str] = Field(default=None, description="Lexer for unknown fence languages")
    link_behavior: str = Field(default="wrap", pattern="^(wrap|prepend|append)$", description="Heading self-link placement")
    heading_link_class: str = "anchor-heading-link"
    line_class:   str = "line"
    highlighted_line_class: str = "line--highlighted"
    on_success:   Optional[str] = Field(default=None, description="Build hook as 'module:function'")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
