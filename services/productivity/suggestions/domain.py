"""Domain contracts for Suggestions service payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from services.productivity.tasks.domain import TaskWithEnergyMatch


class SuggestionKind(str, Enum):
    """Why a task was suggested, strongest first."""

    PERFECT_MATCH = "perfect_match"
    DUE_SOON = "due_soon"
    HIGH_PRIORITY = "high_priority"
    TYPICAL_HOUR = "typical_hour"
    CAPACITY = "capacity"
    GENERAL = "general"


class EnergyTrend(str, Enum):
    """Current energy relative to the usual level for this hour."""

    ABOVE = "above"
    BELOW = "below"
    NORMAL = "normal"


class TaskSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    task: TaskWithEnergyMatch
    kind: SuggestionKind
    reason: str
    confidence: float


class PeakHour(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    hour: int
    energy: int


class SuggestionInsights(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    current_energy: int
    expected_energy: int
    trend: EnergyTrend
    peak_hours: list[PeakHour]


class SuggestionReport(BaseModel):
    """Suggested tasks with the energy context they were chosen for."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    suggestions: list[TaskSuggestion]
    insights: SuggestionInsights
    patterns_count: int
