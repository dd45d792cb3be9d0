"""Team productivity scoring."""

from __future__ import annotations

from uuid import UUID

from services.productivity.scoring import round_half_up
from services.productivity.teams.domain import (
    AnalyticsPeriod,
    PerformerStats,
    TeamActivity,
    TeamAnalytics,
    TeamHourlyEnergy,
)

COMPLETION_WEIGHT = 0.5
ENERGY_WEIGHT = 0.3
THROUGHPUT_WEIGHT = 0.2
THROUGHPUT_CAP = 100.0


def productivity_score(
    *,
    total_tasks: int,
    completed_tasks: int,
    average_energy: float,
    performer_count: int,
) -> int:
    """Blend completion rate, mean energy and per-performer throughput.

    Completion rate is a percentage; throughput is completed tasks per
    performer times ten, capped at 100.
    """
    completion_rate = completed_tasks / total_tasks * 100 if total_tasks > 0 else 0.0
    throughput = min(completed_tasks / max(performer_count, 1) * 10, THROUGHPUT_CAP)
    return round_half_up(
        completion_rate * COMPLETION_WEIGHT
        + average_energy * ENERGY_WEIGHT
        + throughput * THROUGHPUT_WEIGHT
    )


def summarize_activity(
    team_id: UUID, period: AnalyticsPeriod, activity: TeamActivity
) -> TeamAnalytics:
    """Round raw team aggregates into the reported analytics view."""
    average_energy = activity.average_energy if activity.average_energy is not None else 0.0
    return TeamAnalytics(
        team_id=team_id,
        period=period,
        total_tasks=activity.total_tasks,
        completed_tasks=activity.completed_tasks,
        average_energy=round_half_up(average_energy),
        productivity_score=productivity_score(
            total_tasks=activity.total_tasks,
            completed_tasks=activity.completed_tasks,
            average_energy=average_energy,
            performer_count=len(activity.top_performers),
        ),
        top_performers=[
            PerformerStats(
                user_id=item.user_id,
                name=item.name,
                completed_tasks=item.completed_tasks,
                energy_level=round_half_up(item.energy_level),
            )
            for item in activity.top_performers
        ],
        energy_patterns=[
            TeamHourlyEnergy(
                hour=item.hour,
                average_energy=round_half_up(item.average_energy),
                task_count=item.task_count,
            )
            for item in activity.energy_patterns
        ],
    )
