"""Hour-of-day energy pattern derivation."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, tzinfo
from typing import Iterable, Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from services.productivity.scoring.domain import EnergyPattern, HourlyEnergy

DEFAULT_AVERAGE_ENERGY = 3.0
PEAK_THRESHOLD = 4.0
LOW_THRESHOLD = 2.0
MAX_HOURS = 3


class EnergyReading(Protocol):
    """Shape of one energy log consumed by pattern derivation."""

    @property
    def energy_level(self) -> int: ...

    @property
    def logged_at(self) -> datetime: ...


def default_energy_pattern(user_id: UUID) -> EnergyPattern:
    """Pattern reported when no logs fall inside the window."""
    return EnergyPattern(
        user_id=user_id,
        average_energy=DEFAULT_AVERAGE_ENERGY,
        peak_hours=[],
        low_hours=[],
        total_logs=0,
        hourly_data=[],
    )


def hourly_breakdown(
    logs: Iterable[EnergyReading], tz: tzinfo = ZoneInfo("UTC")
) -> list[HourlyEnergy]:
    """Group logs by local hour and rank hours by mean energy, highest first.

    Hours with equal means are ordered by hour.
    """
    levels_by_hour: dict[int, list[int]] = defaultdict(list)
    for log in logs:
        levels_by_hour[log.logged_at.astimezone(tz).hour].append(log.energy_level)

    hours = [
        HourlyEnergy(hour=hour, avg_energy=sum(levels) / len(levels), count=len(levels))
        for hour, levels in levels_by_hour.items()
    ]
    return sorted(hours, key=lambda item: (-item.avg_energy, item.hour))


def calculate_energy_pattern(
    user_id: UUID,
    logs: Iterable[EnergyReading],
    tz: tzinfo = ZoneInfo("UTC"),
) -> EnergyPattern:
    """Derive peak/low hours and the overall average from windowed logs.

    ``low_hours`` are the last three qualifying entries of the
    mean-descending ranking: the lowest hours, still listed highest mean
    first rather than re-sorted ascending.
    """
    materialized = list(logs)
    if not materialized:
        return default_energy_pattern(user_id)

    ranked = hourly_breakdown(materialized, tz)
    peak = [item.hour for item in ranked if item.avg_energy >= PEAK_THRESHOLD]
    low = [item.hour for item in ranked if item.avg_energy <= LOW_THRESHOLD]

    return EnergyPattern(
        user_id=user_id,
        average_energy=sum(log.energy_level for log in materialized) / len(materialized),
        peak_hours=peak[:MAX_HOURS],
        low_hours=low[-MAX_HOURS:],
        total_logs=len(materialized),
        hourly_data=ranked,
    )
