"""Trace settings loaded from the packaged YAML configuration."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator


CONFIG_PATH = Path(__file__).resolve().parent / "config" / "trace.yaml"


class TraceSettings(BaseModel):
    group_conjunction: str = " AND "
    logger_name: str = "rulebook.trace"
    level: str = "DEBUG"
    when_format: str = 'WHEN "%s" was %s'
    then_format: str = 'THEN "%s" stop %s'

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown logging level: {value}")
        return name

    @field_validator("when_format", "then_format")
    @classmethod
    def _two_placeholders(cls, value: str) -> str:
        if value.count("%s") != 2:
            raise ValueError(f"Trace format must contain exactly two %s placeholders: {value!r}")
        return value

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.level)


def _load_yaml_file(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


@lru_cache(maxsize=None)
def load_trace_settings(path: Path | str | None = None) -> TraceSettings:
    """
    Load trace settings from config/trace.yaml (or the given file).

    Keys that are absent fall back to the TraceSettings defaults.
    """
    config_path = Path(path) if path else CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Trace settings not found at {config_path}")
    raw = _load_yaml_file(config_path)
    if not isinstance(raw, dict):
        raise ValueError(f"Trace settings file must be a mapping: {config_path}")
    try:
        return TraceSettings(**raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid trace settings in {config_path}: {exc}") from exc


def reload_caches() -> None:
    """Clear cached settings (useful for tests)."""
    load_trace_settings.cache_clear()
