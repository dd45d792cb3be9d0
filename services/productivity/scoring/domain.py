"""Value objects produced by the energy scoring engine.

None of these are persisted; they are recomputed per request from tasks and
energy logs.
"""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class EnergyMatch(BaseModel):
    """How well one task's energy requirement fits the current energy level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    energy_match: bool
    energy_match_score: float
    bonus_points: int


class HourlyEnergy(BaseModel):
    """Aggregate of energy logs recorded within one hour of the day."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    hour: int
    avg_energy: float
    count: int


class EnergyPattern(BaseModel):
    """Derived energy profile over a trailing window of logs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_id: UUID
    average_energy: float
    peak_hours: list[int]
    low_hours: list[int]
    total_logs: int
    hourly_data: list[HourlyEnergy]


class InsightType(str, Enum):
    """Kinds of energy insight."""

    PEAK_HOURS = "peak_hours"
    ENERGY_MISMATCH = "energy_mismatch"
    LOW_AVERAGE = "low_average"


class EnergyInsight(BaseModel):
    """One human-readable observation about a user's energy."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: InsightType
    message: str
    confidence: float
