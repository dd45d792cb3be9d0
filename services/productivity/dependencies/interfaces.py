"""Transport-neutral protocol interfaces used by the Task Dependencies service."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from services.productivity.dependencies.domain import (
    DependencyType,
    DependentView,
    PrerequisiteView,
    TaskDependencyRecord,
)


class DependencyRepository(Protocol):
    """Protocol for dependency edge persistence."""

    def task_owned(self, *, user_id: UUID, task_id: UUID) -> bool:
        """Return whether the user owns the task."""

    def dependency_exists(self, *, task_id: UUID, depends_on_task_id: UUID) -> bool:
        """Return whether the edge is already stored."""

    def prerequisite_ids(self, *, task_id: UUID) -> list[UUID]:
        """Return ids of every task that ``task_id`` directly depends on."""

    def create_dependency(
        self, *, task_id: UUID, depends_on_task_id: UUID, type: DependencyType
    ) -> TaskDependencyRecord:
        """Insert one edge and return it."""

    def list_prerequisites(self, *, task_id: UUID) -> list[PrerequisiteView]:
        """List edges out of ``task_id``, newest first."""

    def list_dependents(self, *, task_id: UUID) -> list[DependentView]:
        """List edges into ``task_id``, newest first."""

    def delete_dependency(self, *, task_id: UUID, dependency_id: UUID) -> bool:
        """Delete one edge of ``task_id`` and return whether it existed."""
