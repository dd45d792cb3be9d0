"""Authoritative in-process Python API for the Projects service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.postgres import SessionProvider
from services.productivity.projects.domain import ProjectRecord, ProjectWithStats


class ProjectService(ABC):
    """Public API for owner-scoped projects."""

    @abstractmethod
    def create_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[ProjectRecord]:
        """Create one project with color and priority defaults."""

    @abstractmethod
    def list_projects(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        status: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Envelope[list[ProjectRecord]]:
        """List the caller's projects, optionally filtered by status."""

    @abstractmethod
    def get_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, project_id: UUID
    ) -> Envelope[ProjectWithStats]:
        """Read one project with pending/completed counts and earned points."""

    @abstractmethod
    def update_project(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        project_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[ProjectRecord]:
        """Apply the supplied fields to one project."""

    @abstractmethod
    def archive_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, project_id: UUID
    ) -> Envelope[ProjectRecord]:
        """Mark one project archived."""

    @abstractmethod
    def delete_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, project_id: UUID
    ) -> Envelope[bool]:
        """Delete one project; its tasks are kept and detached."""


def build_project_service(*, sessions: SessionProvider) -> ProjectService:
    """Build the default Projects implementation over Postgres."""
    from services.productivity.projects.data import PostgresProjectRepository
    from services.productivity.projects.implementation import DefaultProjectService

    return DefaultProjectService(repository=PostgresProjectRepository(sessions))
