"""Domain contracts for Energy service payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from services.productivity.scoring import EnergyInsight, EnergyPattern


class EnergyLogRecord(BaseModel):
    """One self-reported energy reading; immutable once stored."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    user_id: UUID
    energy_level: int
    mood_tags: list[str] | None
    notes: str | None
    logged_at: datetime


class EnergyInsightsReport(BaseModel):
    """Pattern, latest reading, and the insights derived from them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern: EnergyPattern
    latest: EnergyLogRecord | None
    insights: list[EnergyInsight]
