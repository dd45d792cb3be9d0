"""Authoritative in-process Python API for the Tasks service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock, SystemClock
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.postgres import SessionProvider
from services.productivity.tasks.domain import (
    TaskCompletion,
    TaskRecord,
    TaskStats,
    TaskView,
    TaskWithEnergyMatch,
)


class TaskService(ABC):
    """Public API for owner-scoped tasks, energy matching, and completion."""

    @abstractmethod
    def create_task(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        """Create one task; points derive from priority and energy requirement."""

    @abstractmethod
    def get_task(
        self, *, meta: EnvelopeMeta, user_id: UUID, task_id: UUID
    ) -> Envelope[TaskRecord]:
        """Read one owned task."""

    @abstractmethod
    def list_tasks(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        status: str | None = None,
        project_id: str | UUID | None = None,
        priority: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Envelope[list[TaskView]]:
        """List the caller's tasks with project summaries."""

    @abstractmethod
    def list_tasks_with_energy_match(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        current_energy_level: int,
        project_id: str | UUID | None = None,
        priority: int | None = None,
    ) -> Envelope[list[TaskWithEnergyMatch]]:
        """Score and rank pending tasks against the current energy level."""

    @abstractmethod
    def update_task(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[TaskRecord]:
        """Apply the supplied fields, recomputing points when they depend on them."""

    @abstractmethod
    def complete_task(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        data: Mapping[str, Any] | None = None,
    ) -> Envelope[TaskCompletion]:
        """Complete one pending task and report points earned."""

    @abstractmethod
    def delete_task(
        self, *, meta: EnvelopeMeta, user_id: UUID, task_id: UUID
    ) -> Envelope[bool]:
        """Delete one owned task."""

    @abstractmethod
    def get_task_stats(self, *, meta: EnvelopeMeta, user_id: UUID) -> Envelope[TaskStats]:
        """Report pending/completed counts, weekly completions, and points."""


def build_task_service(
    *, sessions: SessionProvider, clock: Clock | None = None
) -> TaskService:
    """Build the default Tasks implementation over Postgres."""
    from services.productivity.tasks.data import PostgresTaskRepository
    from services.productivity.tasks.implementation import DefaultTaskService

    return DefaultTaskService(
        repository=PostgresTaskRepository(sessions),
        clock=clock if clock is not None else SystemClock(),
    )
