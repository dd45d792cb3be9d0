"""Pydantic request-validation models for the Projects service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.productivity.projects.domain import (
    DEFAULT_PROJECT_COLOR,
    DEFAULT_PROJECT_PRIORITY,
    ProjectStatus,
)

_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class _ValidationModel(BaseModel):
    """Base request model with strict shape semantics."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class CreateProjectRequest(_ValidationModel):
    """Validated create-project request."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    color: str = Field(default=DEFAULT_PROJECT_COLOR, pattern=_COLOR_PATTERN)
    energy_requirement: int | None = Field(default=None, ge=1, le=5)
    priority: int = Field(default=DEFAULT_PROJECT_PRIORITY, ge=1, le=5)


class UpdateProjectRequest(_ValidationModel):
    """Validated partial project update.

    ``description`` and ``energy_requirement`` may be cleared with an
    explicit null; the other fields may not.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    color: str | None = Field(default=None, pattern=_COLOR_PATTERN)
    energy_requirement: int | None = Field(default=None, ge=1, le=5)
    priority: int | None = Field(default=None, ge=1, le=5)

    @field_validator("name", "color", "priority")
    @classmethod
    def _not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("cannot be null")
        return value


class ListProjectsRequest(_ValidationModel):
    """Filters and pagination for project listing."""

    status: ProjectStatus | None = None
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)
