from __future__ import annotations

"""Settings model and loading helpers for the command-line host."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

MAX_ENV_VAR = "UTF8_LEVENSHTEIN_MAX"
LOG_LEVEL_ENV_VAR = "UTF8_LEVENSHTEIN_LOG_LEVEL"


class Settings(BaseModel):
    """Defaults applied by the CLI when computing distances."""

    model_config = ConfigDict(extra="forbid")

    max_distance: Optional[int] = Field(default=None, ge=0)
    log_level: LogLevel = "WARNING"


class SettingsNotFoundError(FileNotFoundError):
    """Raised when a settings file cannot be located."""


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise SettingsNotFoundError(f"Settings file not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return data


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    max_value = environ.get(MAX_ENV_VAR)
    if max_value:
        overrides["max_distance"] = max_value.strip()
    level = environ.get(LOG_LEVEL_ENV_VAR)
    if level:
        overrides["log_level"] = level.strip().upper()
    return overrides


def load_settings(
    path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Load settings from an optional YAML file plus environment overrides."""

    data: Dict[str, Any] = _read_yaml(path) if path is not None else {}
    data.update(_env_overrides(os.environ if environ is None else environ))
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid settings: {exc}") from exc


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


__all__ = [
    "LOG_LEVEL_ENV_VAR",
    "MAX_ENV_VAR",
    "Settings",
    "SettingsNotFoundError",
    "configure_logging",
    "load_settings",
]
