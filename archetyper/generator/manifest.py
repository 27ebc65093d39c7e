from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ManifestInvalidError, ManifestMissingError, ScaffoldIOError

MANIFEST_FILE = "archetype.yml"


class VariableModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prompt: str
    default: str | None = None

    @field_validator("default", mode="before")
    @classmethod
    def scalar_to_str(cls, value: Any) -> Any:
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value


class PostCreateModel(BaseModel):
    commands: list[str] = Field(default_factory=list)

    @field_validator("commands", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class HooksModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    post_create: PostCreateModel = Field(default_factory=PostCreateModel, alias="post-create")

    @field_validator("post_create", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class ManifestModel(BaseModel):
    description: str
    variables: dict[str, VariableModel] = Field(default_factory=dict)
    hooks: HooksModel = Field(default_factory=HooksModel)

    @field_validator("variables", "hooks", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


@dataclass(frozen=True)
class VariableSpec:
    key: str
    prompt: str
    default: str | None = None


@dataclass(frozen=True)
class Manifest:
    description: str
    variables: tuple[VariableSpec, ...] = ()
    hooks: tuple[str, ...] = ()


def parse(template_root: Path) -> Manifest:
    path = Path(template_root) / MANIFEST_FILE
    if not path.is_file():
        raise ManifestMissingError(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestInvalidError(path, f"not valid UTF-8 ({exc})") from exc
    except OSError as exc:
        raise ScaffoldIOError(path, str(exc)) from exc
    return parse_text(text, path)


def parse_text(text: str, path: Path) -> Manifest:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestInvalidError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise ManifestInvalidError(path, "expected a mapping at the top level")
    try:
        model = ManifestModel.model_validate(data)
    except ValidationError as exc:
        raise ManifestInvalidError(path, str(exc)) from exc

    variables = tuple(
        VariableSpec(key=key, prompt=var.prompt, default=var.default)
        for key, var in model.variables.items()
    )
    return Manifest(
        description=model.description,
        variables=variables,
        hooks=tuple(model.hooks.post_create.commands),
    )
