"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from patchpub.core.models import DEFAULT_CONTEXT_LINES


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str = "patchpub"
    context_lines: int = Field(default=DEFAULT_CONTEXT_LINES, ge=0, description="Unchanged lines shown around each change")
    output_format: str = Field(default="text", pattern="^(text|html)$", description="text or html")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", description="stdlib logging level name")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then PATCHPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"PATCHPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
