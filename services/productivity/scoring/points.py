"""Task point values and completion bonuses."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Mapping

DEFAULT_PRIORITY = 3
DEFAULT_ENERGY_REQUIREMENT = 3

PRIORITY_MULTIPLIERS: Mapping[int, int] = MappingProxyType(
    {1: 10, 2: 20, 3: 40, 4: 80, 5: 150}
)
ENERGY_MULTIPLIERS: Mapping[int, Decimal] = MappingProxyType(
    {
        1: Decimal("0.5"),
        2: Decimal("0.75"),
        3: Decimal("1.0"),
        4: Decimal("1.25"),
        5: Decimal("1.5"),
    }
)

_FALLBACK_PRIORITY_MULTIPLIER = PRIORITY_MULTIPLIERS[DEFAULT_PRIORITY]
_FALLBACK_ENERGY_MULTIPLIER = ENERGY_MULTIPLIERS[DEFAULT_ENERGY_REQUIREMENT]
_BONUS_RATE = Decimal("0.25")


def round_half_up(value: Decimal | int | float) -> int:
    """Round to the nearest integer with halves rounded away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_base_points(priority: int | None, energy_requirement: int | None) -> int:
    """Return the point value for a task.

    Values outside the lookup tables fall back to the priority-3 and
    energy-3 multipliers rather than failing.
    """
    priority_multiplier = PRIORITY_MULTIPLIERS.get(priority, _FALLBACK_PRIORITY_MULTIPLIER)
    energy_multiplier = ENERGY_MULTIPLIERS.get(
        energy_requirement, _FALLBACK_ENERGY_MULTIPLIER
    )
    return round_half_up(priority_multiplier * energy_multiplier)


def energy_match_bonus(points: int) -> int:
    """Bonus awarded on top of ``points`` for an exact energy match."""
    return round_half_up(Decimal(points) * _BONUS_RATE)


def completion_bonus(
    *,
    points: int,
    energy_requirement: int,
    current_energy_level: int | None,
) -> int:
    """Bonus for completing a task, nonzero only on an exact energy match."""
    if current_energy_level is None or current_energy_level != energy_requirement:
        return 0
    return energy_match_bonus(points)
