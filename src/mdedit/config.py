"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from mdedit.core.models import Mark


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDEDIT_"
ENV_SKIP = {"shortcuts"}      # mappings are only read from config.yaml


def _default_shortcuts() -> dict[str, Mark]:
    return {"b": Mark.bold, "i": Mark.italic, "u": Mark.underline}


class Settings(BaseModel):
    app_name:         str  = "mdedit"
    log_level:        str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$", description="structlog level")
    strict_selection: bool = Field(default=True, description="Raise on invalid selections; clamp them when false")
    shortcuts: dict[str, Mark] = Field(default_factory=_default_shortcuts, description="Modifier+key -> mark")
    save_key:         str  = Field(default="s", min_length=1, max_length=1, description="Modifier+key that saves")

    @field_validator("save_key")
    @classmethod
    def lower_save_key(cls, v: str) -> str:
        """Pressed keys are matched lowercased, so bindings are stored that way too."""
        return v.lower()

    @field_validator("shortcuts")
    @classmethod
    def lower_shortcut_keys(cls, v: dict[str, Mark]) -> dict[str, Mark]:
        return {key.lower(): mark for key, mark in v.items()}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDEDIT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if name in ENV_SKIP:
            continue
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
