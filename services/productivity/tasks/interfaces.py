"""Transport-neutral protocol interfaces used by the Tasks service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from packages.cadence_shared.unset import UNSET
from services.productivity.tasks.domain import (
    TaskNote,
    TaskRecord,
    TaskRecurrence,
    TaskStats,
    TaskStatus,
    TaskSubtask,
    TaskTag,
    TaskView,
)


@dataclass(frozen=True)
class TaskFilters:
    """Optional listing filters; ``None`` means unfiltered."""

    status: TaskStatus | None = None
    project_id: UUID | None = None
    priority: int | None = None


@dataclass(frozen=True)
class NewTask:
    """Fully defaulted values for one task insert."""

    project_id: UUID | None
    title: str
    description: str | None
    energy_requirement: int
    priority: int
    due_date: datetime | None
    estimated_duration: int | None
    points: int
    tags: list[TaskTag]
    subtasks: list[TaskSubtask]
    notes: list[TaskNote]
    recurrence: TaskRecurrence | None


@dataclass(frozen=True)
class TaskUpdate:
    """Partial task update; ``UNSET`` fields are left untouched."""

    title: str | object = UNSET
    description: str | None | object = UNSET
    energy_requirement: int | object = UNSET
    priority: int | object = UNSET
    points: int | object = UNSET
    project_id: UUID | None | object = UNSET
    due_date: datetime | None | object = UNSET
    estimated_duration: int | None | object = UNSET
    tags: list[TaskTag] | object = UNSET
    subtasks: list[TaskSubtask] | object = UNSET
    notes: list[TaskNote] | object = UNSET
    recurrence: TaskRecurrence | None | object = UNSET


class TaskRepository(Protocol):
    """Protocol for owner-scoped task persistence."""

    def create_task(self, *, user_id: UUID, task: NewTask) -> TaskRecord:
        """Insert one task and return the stored record."""

    def get_task(self, *, user_id: UUID, task_id: UUID) -> TaskRecord | None:
        """Read one owned task."""

    def list_tasks(
        self, *, user_id: UUID, filters: TaskFilters, limit: int, offset: int
    ) -> list[TaskView]:
        """List by priority desc, then due date asc with undated tasks last."""

    def list_pending_by_energy_match(
        self, *, user_id: UUID, current_energy_level: int, filters: TaskFilters
    ) -> list[TaskView]:
        """List pending tasks ordered best energy match first."""

    def project_exists(self, *, user_id: UUID, project_id: UUID) -> bool:
        """Return whether the user owns the project."""

    def update_task(
        self, *, user_id: UUID, task_id: UUID, update: TaskUpdate
    ) -> TaskRecord | None:
        """Apply one partial update; ``None`` when no owned task matches."""

    def complete_task(
        self,
        *,
        user_id: UUID,
        task_id: UUID,
        completed_at: datetime,
        actual_duration: int | None,
    ) -> TaskRecord | None:
        """Mark one pending task completed; ``None`` when it is not pending."""

    def delete_task(self, *, user_id: UUID, task_id: UUID) -> bool:
        """Delete one task and return whether it existed."""

    def get_task_stats(self, *, user_id: UUID, week_start: datetime) -> TaskStats:
        """Aggregate counts, earned points, and mean duration."""
