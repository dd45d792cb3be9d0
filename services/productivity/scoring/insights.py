"""Insight rules evaluated over a derived energy pattern."""

from __future__ import annotations

from typing import Protocol

from services.productivity.scoring.domain import EnergyInsight, EnergyPattern, InsightType

PEAK_HOURS_CONFIDENCE = 0.85
ENERGY_MISMATCH_CONFIDENCE = 0.75
LOW_AVERAGE_CONFIDENCE = 0.8

_PEAK_LEVEL = 4
_LOW_AVERAGE = 3


class LatestReading(Protocol):
    """Most recent energy log, as seen by insight rules."""

    @property
    def energy_level(self) -> int: ...


def generate_energy_insights(
    pattern: EnergyPattern,
    latest: LatestReading | None,
    current_hour: int,
) -> list[EnergyInsight]:
    """Return every applicable insight in rule order."""
    insights: list[EnergyInsight] = []

    if pattern.peak_hours:
        hours = ", ".join(str(hour) for hour in pattern.peak_hours)
        insights.append(
            EnergyInsight(
                type=InsightType.PEAK_HOURS,
                message=f"Your peak energy hours are: {hours}:00",
                confidence=PEAK_HOURS_CONFIDENCE,
            )
        )

    if (
        latest is not None
        and current_hour in pattern.peak_hours
        and latest.energy_level < _PEAK_LEVEL
    ):
        insights.append(
            EnergyInsight(
                type=InsightType.ENERGY_MISMATCH,
                message=(
                    "This is usually your peak time, but your energy is lower "
                    "than expected"
                ),
                confidence=ENERGY_MISMATCH_CONFIDENCE,
            )
        )

    if pattern.average_energy < _LOW_AVERAGE:
        insights.append(
            EnergyInsight(
                type=InsightType.LOW_AVERAGE,
                message=(
                    "Your average energy has been low recently. Consider adjusting "
                    "your schedule or taking breaks."
                ),
                confidence=LOW_AVERAGE_CONFIDENCE,
            )
        )

    return insights
