"""Pydantic request-validation models for the Task Dependencies service."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from services.productivity.dependencies.domain import DependencyType


class AddDependencyRequest(BaseModel):
    """Validated new dependency edge."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    depends_on_task_id: UUID
    type: DependencyType = DependencyType.REQUIRES
