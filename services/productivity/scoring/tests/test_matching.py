"""Tests for energy-match scoring and candidate ranking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from services.productivity.scoring import (
    match_energy,
    rank_energy_matches,
    score_energy_match,
)


@dataclass(frozen=True)
class _Candidate:
    name: str
    energy_match_score: float
    priority: int
    due_date: datetime | None


def test_score_energy_match_by_distance() -> None:
    """Score should be 1.0 exact, 0.5 one level apart, else 0.0."""
    assert score_energy_match(3, 3) == 1.0
    assert score_energy_match(3, 4) == 0.5
    assert score_energy_match(3, 2) == 0.5
    assert score_energy_match(3, 5) == 0.0
    assert score_energy_match(1, 5) == 0.0


def test_match_energy_awards_bonus_only_on_exact_match() -> None:
    """Exact matches carry a quarter-points bonus; near misses carry none."""
    exact = match_energy(points=40, energy_requirement=3, current_energy_level=3)
    near = match_energy(points=40, energy_requirement=3, current_energy_level=4)

    assert exact.energy_match is True
    assert exact.energy_match_score == 1.0
    assert exact.bonus_points == 10
    assert near.energy_match is False
    assert near.energy_match_score == 0.5
    assert near.bonus_points == 0


def test_rank_orders_by_priority_then_due_date_with_missing_dates_last() -> None:
    """Equal scores should sort by priority desc, then dated tasks before undated."""
    today = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
    a = _Candidate("A", 1.0, 5, None)
    b = _Candidate("B", 1.0, 5, today + timedelta(days=1))
    c = _Candidate("C", 1.0, 3, today)

    ranked = rank_energy_matches([a, b, c])

    assert [item.name for item in ranked] == ["B", "A", "C"]


def test_rank_prefers_score_over_priority() -> None:
    """A better energy fit should outrank a higher priority."""
    strong_fit = _Candidate("fit", 1.0, 1, None)
    urgent = _Candidate("urgent", 0.5, 5, datetime(2026, 1, 1, tzinfo=UTC))

    ranked = rank_energy_matches([urgent, strong_fit])

    assert [item.name for item in ranked] == ["fit", "urgent"]


def test_rank_orders_earlier_due_dates_first() -> None:
    """Among equal score and priority, the earliest due date wins."""
    early = _Candidate("early", 0.5, 2, datetime(2026, 1, 1, tzinfo=UTC))
    late = _Candidate("late", 0.5, 2, datetime(2026, 2, 1, tzinfo=UTC))

    assert [item.name for item in rank_energy_matches([late, early])] == ["early", "late"]
