"""Pydantic request-validation models for the Tasks service."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.productivity.tasks.domain import (
    TaskNote,
    TaskRecurrence,
    TaskStatus,
    TaskSubtask,
    TaskTag,
)


class _ValidationModel(BaseModel):
    """Base request model with strict shape semantics."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SubtaskInput(_ValidationModel):
    """Subtask as supplied by a caller; ``created_at`` defaults to now."""

    id: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1, max_length=500)
    completed: bool = False
    created_at: datetime | None = None


class NoteInput(_ValidationModel):
    """Note as supplied by a caller; ``created_at`` defaults to now."""

    id: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1, max_length=2000)
    created_at: datetime | None = None


class CreateTaskRequest(_ValidationModel):
    """Validated create-task request.

    ``priority`` and ``energy_requirement`` stay ``None`` when omitted so the
    service can apply defaults by presence rather than truthiness.
    """

    title: str = Field(min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=2000)
    energy_requirement: int | None = Field(default=None, ge=1, le=5)
    priority: int | None = Field(default=None, ge=1, le=5)
    project_id: UUID | None = None
    due_date: datetime | None = None
    estimated_duration: int | None = Field(default=None, gt=0)
    tags: list[TaskTag] = Field(default_factory=list)
    subtasks: list[SubtaskInput] = Field(default_factory=list)
    notes: list[NoteInput] = Field(default_factory=list)
    recurrence: TaskRecurrence | None = None


class UpdateTaskRequest(_ValidationModel):
    """Validated partial task update; only supplied fields change."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=2000)
    energy_requirement: int | None = Field(default=None, ge=1, le=5)
    priority: int | None = Field(default=None, ge=1, le=5)
    project_id: UUID | None = None
    due_date: datetime | None = None
    estimated_duration: int | None = Field(default=None, gt=0)
    tags: list[TaskTag] | None = None
    subtasks: list[SubtaskInput] | None = None
    notes: list[NoteInput] | None = None
    recurrence: TaskRecurrence | None = None

    @field_validator("title", "energy_requirement", "priority", "tags", "subtasks", "notes")
    @classmethod
    def _not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("cannot be null")
        return value


class CompleteTaskRequest(_ValidationModel):
    """Optional completion details."""

    actual_duration: int | None = Field(default=None, gt=0)
    current_energy_level: int | None = Field(default=None, ge=1, le=5)


class ListTasksRequest(_ValidationModel):
    """Filters and pagination for task listing."""

    status: TaskStatus | None = None
    project_id: UUID | None = None
    priority: int | None = Field(default=None, ge=1, le=5)
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class EnergyMatchRequest(_ValidationModel):
    """Current energy level and filters for energy-matched listing."""

    current_energy_level: int = Field(ge=1, le=5)
    project_id: UUID | None = None
    priority: int | None = Field(default=None, ge=1, le=5)


def stamp_subtasks(items: list[SubtaskInput], now: datetime) -> list[TaskSubtask]:
    """Convert caller subtasks to stored form, stamping missing creation times."""
    return [
        TaskSubtask(
            id=item.id,
            text=item.text,
            completed=item.completed,
            created_at=item.created_at if item.created_at is not None else now,
        )
        for item in items
    ]


def stamp_notes(items: list[NoteInput], now: datetime) -> list[TaskNote]:
    """Convert caller notes to stored form, stamping missing creation times."""
    return [
        TaskNote(
            id=item.id,
            text=item.text,
            created_at=item.created_at if item.created_at is not None else now,
        )
        for item in items
    ]
