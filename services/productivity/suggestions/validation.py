"""Pydantic request-validation models for the Suggestions service."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AcceptSuggestionRequest(BaseModel):
    """Accepted suggestion, optionally scheduled for a specific time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    task_id: UUID
    schedule_time: datetime | None = None
