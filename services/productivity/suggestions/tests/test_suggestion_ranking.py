"""Tests for suggestion rules, expected energy, and energy summaries."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from services.productivity.scoring import HourlyEnergy
from services.productivity.suggestions.domain import EnergyTrend, SuggestionKind
from services.productivity.suggestions.ranking import (
    classify,
    expected_energy,
    select_suggestions,
    summarize_energy,
)
from services.productivity.tasks.domain import TaskStatus, TaskWithEnergyMatch

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=UTC)


def test_expected_energy_rounds_half_up() -> None:
    assert expected_energy(HourlyEnergy(hour=9, avg_energy=3.5, count=2)) == 4
    assert expected_energy(None) == 3


def test_summarize_energy_reports_trend_and_well_sampled_peaks() -> None:
    """Peaks need at least three readings and are capped at three hours."""
    hourly = [
        HourlyEnergy(hour=10, avg_energy=4.8, count=2),
        HourlyEnergy(hour=9, avg_energy=4.5, count=3),
        HourlyEnergy(hour=11, avg_energy=4.0, count=4),
        HourlyEnergy(hour=8, avg_energy=3.2, count=5),
        HourlyEnergy(hour=15, avg_energy=2.0, count=9),
    ]

    insights = summarize_energy(hourly, current_energy=5, expected=4)

    assert insights.trend == EnergyTrend.ABOVE
    assert [(peak.hour, peak.energy) for peak in insights.peak_hours] == [
        (9, 5),
        (11, 4),
        (8, 3),
    ]


def test_summarize_energy_below_trend() -> None:
    insights = summarize_energy([], current_energy=1, expected=3)

    assert insights.trend == EnergyTrend.BELOW
    assert insights.peak_hours == []




def _pending_task(*, energy_requirement: int, priority: int) -> TaskWithEnergyMatch:
    return TaskWithEnergyMatch(
        id=uuid4(),
        user_id=uuid4(),
        project_id=None,
        title="Review notes",
        description=None,
        energy_requirement=energy_requirement,
        priority=priority,
        status=TaskStatus.PENDING,
        due_date=None,
        completed_at=None,
        estimated_duration=None,
        actual_duration=None,
        points=20,
        tags=[],
        subtasks=[],
        notes=[],
        recurrence=None,
        created_at=NOW,
        updated_at=NOW,
        energy_match=False,
        energy_match_score=0.0,
        bonus_points=0,
    )


def test_typical_hour_compares_against_rounded_expected_energy() -> None:
    """A requirement at the rounded hourly level counts as a typical-hour fit."""
    task = _pending_task(energy_requirement=3, priority=2)
    hour = HourlyEnergy(hour=9, avg_energy=2.6, count=6)

    suggestion = classify(task, current_energy=1, current_hour=hour, now=NOW)
    kept = select_suggestions([task], current_energy=1, current_hour=hour, now=NOW)

    assert suggestion.kind == SuggestionKind.TYPICAL_HOUR
    assert suggestion.confidence == 0.70
    assert "energy 3" in suggestion.reason
    assert [item.task.id for item in kept] == [task.id]


def test_requirement_above_expected_energy_is_filtered_out() -> None:
    task = _pending_task(energy_requirement=4, priority=2)
    hour = HourlyEnergy(hour=9, avg_energy=2.6, count=6)

    suggestion = classify(task, current_energy=1, current_hour=hour, now=NOW)

    assert suggestion.kind == SuggestionKind.CAPACITY
    assert select_suggestions([task], current_energy=1, current_hour=hour, now=NOW) == []
