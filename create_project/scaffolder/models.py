"""Pydantic v2 models passed into and out of the scaffolder."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from create_project.validation import validate_project_name


class GitStep(str, Enum):
    """Steps of the git bootstrap, in execution order."""
    INIT = "init"
    ADD = "add"
    COMMIT = "commit"


class ScaffoldRequest(BaseModel):
    """Validated input to :meth:`ProjectScaffolder.scaffold`.

    ``features`` keeps selection order, which decides dependency overrides;
    repeated keys collapse onto their first occurrence.
    """
    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Project name, also the package name")
    project_path: Path = Field(..., description="Absolute destination directory")
    preset: str = Field(..., description="Preset key")
    features: tuple[str, ...] = Field(default=(), description="Feature keys in selection order")
    skip_git: bool = Field(default=False)
    skip_install: bool = Field(default=False)

    @field_validator("project_name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        result = validate_project_name(value)
        if not result.valid:
            raise ValueError(result.error)
        return value

    @field_validator("project_path")
    @classmethod
    def _absolute_path(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"Project path must be absolute: {value}")
        return value

    @field_validator("preset", mode="before")
    @classmethod
    def _preset_value(cls, value: Any) -> Any:
        return value.value if isinstance(value, Enum) else value

    @field_validator("features", mode="before")
    @classmethod
    def _ordered_unique(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: dict[str, None] = {}
        for item in value:
            seen.setdefault(item.value if isinstance(item, Enum) else item, None)
        return tuple(seen)


class GitBootstrapResult(BaseModel):
    """Outcome of the optional git bootstrap.

    A failure here is reported and ignored; it never fails the scaffold.
    """

    ok: bool
    failed_step: GitStep | None = None
    message: str = ""


class ScaffoldResult(BaseModel):
    """Outcome of :func:`scaffold_project`."""

    success: bool
    project_path: Path | None = None
    error: str | None = None
    git: GitBootstrapResult | None = None
    files: list[Path] = Field(
        default_factory=list, description="Files written or copied into the project"
    )
