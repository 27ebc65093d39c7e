"""Tool configuration: search roots, archetype name mappings, hook environment."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..generator.errors import ConfigError

logger = logging.getLogger(__name__)

LOCAL_CONFIG = Path(".archetyper.yml")
USER_CONFIG = Path(".config") / "archetyper" / "config.yml"


class TemplatesConfig(BaseModel):
    locations: List[Path] = Field(default_factory=list)

    @field_validator("locations")
    @classmethod
    def expand_user(cls, value: List[Path]) -> List[Path]:
        return [p.expanduser() for p in value]


class HooksConfig(BaseModel):
    env: Dict[str, str] = Field(default_factory=dict)
    path: List[Path] = Field(default_factory=list)

    @field_validator("path")
    @classmethod
    def expand_user(cls, value: List[Path]) -> List[Path]:
        return [p.expanduser() for p in value]


class Config(BaseModel):
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    archetypes: Dict[str, str] = Field(default_factory=dict)
    hooks: HooksConfig = Field(default_factory=HooksConfig)
    source: Path | None = None

    @field_validator("templates", "archetypes", "hooks", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


def read_config(path: Path) -> Config:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise ConfigError(path, "expected a mapping at the top level")
    data.pop("source", None)
    try:
        return Config.model_validate({**data, "source": path})
    except ValidationError as exc:
        raise ConfigError(path, str(exc)) from exc


def load_config(cwd: Path | None = None, home: Path | None = None) -> Config:
    """Load ./.archetyper.yml, else ~/.config/archetyper/config.yml, else defaults."""
    cwd = Path.cwd() if cwd is None else Path(cwd)
    home = Path.home() if home is None else Path(home)
    for candidate in (cwd / LOCAL_CONFIG, home / USER_CONFIG):
        if candidate.is_file():
            logger.info("Loading config from: %s", candidate)
            return read_config(candidate)
    logger.info("No config file found, using default settings.")
    return Config()
