"""Domain contracts for Task Dependencies service payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from services.productivity.tasks.domain import TaskStatus


class DependencyType(str, Enum):
    """How strongly one task depends on another.

    ``blocks`` and ``requires`` gate completion; ``suggests`` is advisory.
    """

    BLOCKS = "blocks"
    REQUIRES = "requires"
    SUGGESTS = "suggests"


GATING_TYPES = frozenset({DependencyType.BLOCKS, DependencyType.REQUIRES})


class TaskDependencyRecord(BaseModel):
    """Directed edge: ``task_id`` depends on ``depends_on_task_id``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    task_id: UUID
    depends_on_task_id: UUID
    type: DependencyType
    created_at: datetime


class PrerequisiteView(TaskDependencyRecord):
    """Edge annotated with the prerequisite task's state."""

    depends_on_title: str
    depends_on_status: TaskStatus
    depends_on_priority: int


class DependentView(TaskDependencyRecord):
    """Edge annotated with the dependent task's state."""

    task_title: str
    task_status: TaskStatus


class DependencyOverview(BaseModel):
    """Both directions of a task's dependency edges."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dependencies: list[PrerequisiteView]
    dependents: list[DependentView]
    can_complete: bool


def can_complete(dependencies: list[PrerequisiteView]) -> bool:
    """Return whether every gating prerequisite is completed."""
    return all(
        item.depends_on_status == TaskStatus.COMPLETED
        for item in dependencies
        if item.type in GATING_TYPES
    )
