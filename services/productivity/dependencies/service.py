"""Authoritative in-process Python API for the Task Dependencies service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.postgres import SessionProvider
from services.productivity.dependencies.domain import (
    DependencyOverview,
    TaskDependencyRecord,
)


class DependencyService(ABC):
    """Public API for directed, acyclic dependency edges between owned tasks."""

    @abstractmethod
    def add_dependency(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[TaskDependencyRecord]:
        """Make ``task_id`` depend on another owned task."""

    @abstractmethod
    def get_dependencies(
        self, *, meta: EnvelopeMeta, user_id: UUID, task_id: UUID
    ) -> Envelope[DependencyOverview]:
        """Read prerequisites, dependents and completion readiness of one task."""

    @abstractmethod
    def remove_dependency(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        dependency_id: UUID,
    ) -> Envelope[bool]:
        """Delete one edge of ``task_id``."""


def build_dependency_service(*, sessions: SessionProvider) -> DependencyService:
    """Build the default Task Dependencies implementation over Postgres."""
    from services.productivity.dependencies.data import PostgresDependencyRepository
    from services.productivity.dependencies.implementation import (
        DefaultDependencyService,
    )

    return DefaultDependencyService(repository=PostgresDependencyRepository(sessions))
