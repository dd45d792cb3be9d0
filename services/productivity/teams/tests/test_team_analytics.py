"""Tests for team productivity scoring."""

from __future__ import annotations

from services.productivity.teams.analytics import productivity_score


def test_productivity_score_blends_weighted_components() -> None:
    """60% completion, energy 3.5 and two completions per performer give 35."""
    assert (
        productivity_score(
            total_tasks=10, completed_tasks=6, average_energy=3.5, performer_count=3
        )
        == 35
    )


def test_productivity_score_rounds_halves_up() -> None:
    """50 + 1.5 + 8 = 59.5 should round to 60."""
    assert (
        productivity_score(
            total_tasks=4, completed_tasks=4, average_energy=5.0, performer_count=1
        )
        == 60
    )


def test_productivity_score_caps_throughput_and_tolerates_no_performers() -> None:
    """Throughput is capped at 100 and zero performers count as one."""
    capped = productivity_score(
        total_tasks=50, completed_tasks=50, average_energy=0.0, performer_count=0
    )

    assert capped == 70


def test_productivity_score_without_tasks_uses_energy_only() -> None:
    assert (
        productivity_score(
            total_tasks=0, completed_tasks=0, average_energy=4.0, performer_count=2
        )
        == 1
    )
