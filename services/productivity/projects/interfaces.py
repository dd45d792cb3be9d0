"""Transport-neutral protocol interfaces used by the Projects service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from packages.cadence_shared.unset import UNSET
from services.productivity.projects.domain import (
    ProjectRecord,
    ProjectStatus,
    ProjectWithStats,
)


@dataclass(frozen=True)
class NewProject:
    """Fully defaulted values for one project insert."""

    name: str
    description: str | None
    color: str
    energy_requirement: int | None
    priority: int


@dataclass(frozen=True)
class ProjectUpdate:
    """Partial project update; ``UNSET`` fields are left untouched."""

    name: str | object = UNSET
    description: str | None | object = UNSET
    color: str | object = UNSET
    energy_requirement: int | None | object = UNSET
    priority: int | object = UNSET
    status: ProjectStatus | object = UNSET


class ProjectRepository(Protocol):
    """Protocol for owner-scoped project persistence."""

    def create_project(self, *, user_id: UUID, project: NewProject) -> ProjectRecord:
        """Insert one project and return the stored record."""

    def list_projects(
        self,
        *,
        user_id: UUID,
        status: ProjectStatus | None,
        limit: int,
        offset: int,
    ) -> list[ProjectRecord]:
        """List projects by priority desc, then newest first."""

    def get_project_with_stats(
        self, *, user_id: UUID, project_id: UUID
    ) -> ProjectWithStats | None:
        """Read one project with task rollups."""

    def update_project(
        self, *, user_id: UUID, project_id: UUID, update: ProjectUpdate
    ) -> ProjectRecord | None:
        """Apply one partial update; ``None`` when no owned project matches."""

    def delete_project(self, *, user_id: UUID, project_id: UUID) -> bool:
        """Delete one project and return whether it existed."""
