"""Energy-match scoring and ranking of candidate tasks."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol, TypeVar

from services.productivity.scoring.domain import EnergyMatch
from services.productivity.scoring.points import energy_match_bonus

EXACT_MATCH_SCORE = 1.0
ADJACENT_MATCH_SCORE = 0.5
NO_MATCH_SCORE = 0.0


class Rankable(Protocol):
    """Shape required to order energy-matched tasks."""

    @property
    def energy_match_score(self) -> float: ...

    @property
    def priority(self) -> int: ...

    @property
    def due_date(self) -> datetime | None: ...


TRankable = TypeVar("TRankable", bound=Rankable)


def score_energy_match(energy_requirement: int, current_energy_level: int) -> float:
    """Return 1.0 for an exact match, 0.5 when one level apart, else 0.0."""
    difference = abs(energy_requirement - current_energy_level)
    if difference == 0:
        return EXACT_MATCH_SCORE
    if difference == 1:
        return ADJACENT_MATCH_SCORE
    return NO_MATCH_SCORE


def match_energy(
    *, points: int, energy_requirement: int, current_energy_level: int
) -> EnergyMatch:
    """Score one task against the current level, including its bonus."""
    matched = energy_requirement == current_energy_level
    return EnergyMatch(
        energy_match=matched,
        energy_match_score=score_energy_match(energy_requirement, current_energy_level),
        bonus_points=energy_match_bonus(points) if matched else 0,
    )


def ranking_key(
    energy_match_score: float, priority: int, due_date: datetime | None
) -> tuple[float, int, int, float]:
    """Sort key: score desc, priority desc, due date asc with missing dates last."""
    if due_date is None:
        return (-energy_match_score, -priority, 1, 0.0)
    return (-energy_match_score, -priority, 0, due_date.timestamp())


def rank_energy_matches(items: Iterable[TRankable]) -> list[TRankable]:
    """Return ``items`` ordered best-first for the current energy level."""
    return sorted(
        items,
        key=lambda item: ranking_key(item.energy_match_score, item.priority, item.due_date),
    )
