"""Confidence rules for energy-aware task suggestions."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from services.productivity.scoring import (
    DEFAULT_ENERGY_REQUIREMENT,
    HourlyEnergy,
    round_half_up,
)
from services.productivity.suggestions.domain import (
    EnergyTrend,
    PeakHour,
    SuggestionInsights,
    SuggestionKind,
    TaskSuggestion,
)
from services.productivity.tasks.domain import TaskWithEnergyMatch

CONFIDENCE = {
    SuggestionKind.PERFECT_MATCH: 0.95,
    SuggestionKind.DUE_SOON: 0.85,
    SuggestionKind.HIGH_PRIORITY: 0.75,
    SuggestionKind.TYPICAL_HOUR: 0.70,
    SuggestionKind.GENERAL: 0.60,
    SuggestionKind.CAPACITY: 0.50,
}
MIN_CONFIDENCE = 0.60
MAX_SUGGESTIONS = 5
DUE_SOON_WINDOW = timedelta(hours=24)
HIGH_PRIORITY = 4
WELL_SAMPLED_COUNT = 5
PEAK_HOUR_MIN_COUNT = 3
MAX_PEAK_HOURS = 3


def expected_energy(current_hour: HourlyEnergy | None) -> int:
    """Rounded mean for the current hour, or the neutral level without history."""
    if current_hour is None:
        return DEFAULT_ENERGY_REQUIREMENT
    return round_half_up(current_hour.avg_energy)


def classify(
    task: TaskWithEnergyMatch,
    *,
    current_energy: int,
    current_hour: HourlyEnergy | None,
    now: datetime,
) -> TaskSuggestion:
    """Apply the first matching suggestion rule to one pending task."""
    if task.energy_match:
        kind = SuggestionKind.PERFECT_MATCH
        reason = (
            f"Perfect energy match: this level-{task.energy_requirement} task fits "
            f"your current energy of {current_energy}."
        )
    elif task.due_date is not None and task.due_date < now + DUE_SOON_WINDOW:
        kind = SuggestionKind.DUE_SOON
        reason = f"Due soon. Knock this out while you have energy {current_energy}."
    elif task.priority >= HIGH_PRIORITY:
        kind = SuggestionKind.HIGH_PRIORITY
        reason = f"High priority task. Your energy of {current_energy} can handle it."
    elif current_hour is not None and current_hour.count > WELL_SAMPLED_COUNT:
        typical = expected_energy(current_hour)
        if task.energy_requirement <= typical:
            kind = SuggestionKind.TYPICAL_HOUR
            reason = f"You typically have energy {typical} at this hour, a good time for this."
        else:
            kind = SuggestionKind.CAPACITY
            reason = "Consider this task when your capacity allows."
    else:
        kind = SuggestionKind.GENERAL
        reason = f"This task fits your current energy of {current_energy}."
    return TaskSuggestion(task=task, kind=kind, reason=reason, confidence=CONFIDENCE[kind])


def select_suggestions(
    ranked_tasks: Iterable[TaskWithEnergyMatch],
    *,
    current_energy: int,
    current_hour: HourlyEnergy | None,
    now: datetime,
) -> list[TaskSuggestion]:
    """Keep confident suggestions, most confident first, preserving rank on ties."""
    candidates = [
        classify(task, current_energy=current_energy, current_hour=current_hour, now=now)
        for task in ranked_tasks
    ]
    confident = [item for item in candidates if item.confidence >= MIN_CONFIDENCE]
    confident.sort(key=lambda item: -item.confidence)
    return confident[:MAX_SUGGESTIONS]


def summarize_energy(
    hourly: list[HourlyEnergy], *, current_energy: int, expected: int
) -> SuggestionInsights:
    """Compare current energy with the usual level and list well-sampled peaks.

    ``hourly`` is expected highest mean first.
    """
    if current_energy > expected:
        trend = EnergyTrend.ABOVE
    elif current_energy < expected:
        trend = EnergyTrend.BELOW
    else:
        trend = EnergyTrend.NORMAL
    peaks = [item for item in hourly if item.count >= PEAK_HOUR_MIN_COUNT][:MAX_PEAK_HOURS]
    return SuggestionInsights(
        current_energy=current_energy,
        expected_energy=expected,
        trend=trend,
        peak_hours=[
            PeakHour(hour=item.hour, energy=round_half_up(item.avg_energy)) for item in peaks
        ],
    )
