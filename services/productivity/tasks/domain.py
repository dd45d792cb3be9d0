"""Domain contracts for Tasks service payloads.

Tags, subtasks, notes, and recurrence are stored as JSON documents on the
task row and are modeled here as nested value objects.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Lifecycle state of one task; completion is terminal."""

    PENDING = "pending"
    COMPLETED = "completed"


class RecurrenceFrequency(str, Enum):
    """Supported repeat cadences."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class _ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class TaskTag(_ValueObject):
    """Label attached to a task."""

    id: str = Field(min_length=1, max_length=100)
    label: str = Field(min_length=1, max_length=50)
    color: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")


class TaskSubtask(_ValueObject):
    """Checklist entry within a task."""

    id: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1, max_length=500)
    completed: bool = False
    created_at: datetime


class TaskNote(_ValueObject):
    """Free-form progress note on a task."""

    id: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1, max_length=2000)
    created_at: datetime


class TaskRecurrence(_ValueObject):
    """Repeat configuration for a task."""

    frequency: RecurrenceFrequency
    interval: int = Field(default=1, ge=1, le=365)
    is_active: bool = True


class TaskRecord(_ValueObject):
    """Authoritative task record.

    ``points`` always equals ``calculate_base_points(priority,
    energy_requirement)``.
    """

    id: UUID
    user_id: UUID
    project_id: UUID | None
    title: str
    description: str | None
    energy_requirement: int
    priority: int
    status: TaskStatus
    due_date: datetime | None
    completed_at: datetime | None
    estimated_duration: int | None
    actual_duration: int | None
    points: int
    tags: list[TaskTag]
    subtasks: list[TaskSubtask]
    notes: list[TaskNote]
    recurrence: TaskRecurrence | None
    created_at: datetime
    updated_at: datetime


class ProjectSummary(_ValueObject):
    """Compact project reference embedded in task listings."""

    id: UUID
    name: str
    color: str


class TaskView(TaskRecord):
    """Task as listed, with its project summary when assigned."""

    project: ProjectSummary | None = None


class TaskWithEnergyMatch(TaskView):
    """Pending task scored against the caller's current energy level."""

    energy_match: bool
    energy_match_score: float
    bonus_points: int


class TaskCompletion(_ValueObject):
    """Outcome of completing one task."""

    task: TaskRecord
    points_earned: int
    bonus_points: int
    energy_match_bonus: bool


class TaskStats(_ValueObject):
    """Per-user task rollups."""

    pending_count: int
    completed_count: int
    completed_this_week: int
    total_points: int
    avg_duration: float | None
