"""Domain contracts for Projects service payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict

DEFAULT_PROJECT_COLOR = "#6366f1"
DEFAULT_PROJECT_PRIORITY = 3


class ProjectStatus(str, Enum):
    """Lifecycle state of one project."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class ProjectRecord(BaseModel):
    """Authoritative project record."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    user_id: UUID
    name: str
    description: str | None
    color: str
    energy_requirement: int | None
    priority: int
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime


class ProjectWithStats(ProjectRecord):
    """Project record with task rollups.

    ``total_points`` sums the points of completed tasks only.
    """

    pending_tasks: int
    completed_tasks: int
    total_points: int
