"""Energy scoring engine: points, energy matching, patterns, and insights."""

from services.productivity.scoring.domain import (
    EnergyInsight,
    EnergyMatch,
    EnergyPattern,
    HourlyEnergy,
    InsightType,
)
from services.productivity.scoring.insights import generate_energy_insights
from services.productivity.scoring.matching import (
    match_energy,
    rank_energy_matches,
    ranking_key,
    score_energy_match,
)
from services.productivity.scoring.patterns import (
    calculate_energy_pattern,
    default_energy_pattern,
    hourly_breakdown,
)
from services.productivity.scoring.points import (
    DEFAULT_ENERGY_REQUIREMENT,
    DEFAULT_PRIORITY,
    ENERGY_MULTIPLIERS,
    PRIORITY_MULTIPLIERS,
    calculate_base_points,
    completion_bonus,
    energy_match_bonus,
    round_half_up,
)

__all__ = [
    "DEFAULT_ENERGY_REQUIREMENT",
    "DEFAULT_PRIORITY",
    "ENERGY_MULTIPLIERS",
    "EnergyInsight",
    "EnergyMatch",
    "EnergyPattern",
    "HourlyEnergy",
    "InsightType",
    "PRIORITY_MULTIPLIERS",
    "calculate_base_points",
    "calculate_energy_pattern",
    "completion_bonus",
    "default_energy_pattern",
    "energy_match_bonus",
    "generate_energy_insights",
    "hourly_breakdown",
    "match_energy",
    "rank_energy_matches",
    "ranking_key",
    "round_half_up",
    "score_energy_match",
]
