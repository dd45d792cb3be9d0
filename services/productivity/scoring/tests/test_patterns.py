"""Tests for hour-of-day energy pattern derivation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

from services.productivity.scoring import (
    calculate_energy_pattern,
    default_energy_pattern,
    hourly_breakdown,
)


@dataclass(frozen=True)
class _Log:
    energy_level: int
    logged_at: datetime


def _at(hour: int, day: int = 2) -> datetime:
    return datetime(2026, 3, day, hour, 15, tzinfo=UTC)


def test_empty_window_returns_default_pattern() -> None:
    """No logs should produce average 3 with empty hour lists."""
    user_id = uuid4()

    pattern = calculate_energy_pattern(user_id, [])

    assert pattern == default_energy_pattern(user_id)
    assert pattern.average_energy == 3
    assert pattern.peak_hours == []
    assert pattern.low_hours == []
    assert pattern.total_logs == 0


def test_average_is_over_logs_not_hours() -> None:
    """The overall average should weight every log equally."""
    logs = [_Log(5, _at(9)), _Log(5, _at(9, day=3)), _Log(5, _at(9, day=4)), _Log(1, _at(20))]

    pattern = calculate_energy_pattern(uuid4(), logs)

    assert pattern.average_energy == 4.0
    assert pattern.total_logs == 4


def test_peak_hours_take_top_three_by_mean() -> None:
    """Peak hours should be the first three hours with mean of at least 4."""
    logs = [
        _Log(5, _at(9)),
        _Log(4, _at(10)),
        _Log(5, _at(11)),
        _Log(4, _at(11, day=3)),
        _Log(4, _at(14)),
        _Log(3, _at(16)),
    ]

    pattern = calculate_energy_pattern(uuid4(), logs)

    assert pattern.peak_hours == [9, 11, 10]
    assert [item.hour for item in pattern.hourly_data] == [9, 11, 10, 14, 16]


def test_low_hours_are_tail_of_descending_ranking() -> None:
    """Low hours should keep the ranking's tail order, not an ascending re-sort."""
    logs = [
        _Log(5, _at(8)),
        _Log(2, _at(13)),
        _Log(2, _at(16)),
        _Log(2, _at(16, day=3)),
        _Log(2, _at(16, day=4)),
        _Log(1, _at(16, day=5)),
        _Log(2, _at(14)),
        _Log(1, _at(14, day=3)),
        _Log(1, _at(15)),
    ]

    pattern = calculate_energy_pattern(uuid4(), logs)

    # Ranked lows: 13 (2.0), 16 (1.75), 14 (1.5), 15 (1.0).
    assert pattern.low_hours == [16, 14, 15]


def test_hourly_breakdown_uses_supplied_timezone() -> None:
    """Hours should be bucketed in the caller's timezone."""
    logs = [_Log(4, datetime(2026, 3, 2, 14, 0, tzinfo=UTC))]

    breakdown = hourly_breakdown(logs, ZoneInfo("America/New_York"))

    assert breakdown[0].hour == 9
    assert breakdown[0].count == 1


def test_hourly_breakdown_breaks_mean_ties_by_hour() -> None:
    """Hours with equal means should be ordered by hour."""
    logs = [_Log(3, _at(18)), _Log(3, _at(7))]

    assert [item.hour for item in hourly_breakdown(logs)] == [7, 18]
