"""Explicit construction of every productivity service over one Postgres runtime."""

from __future__ import annotations

from dataclasses import dataclass

from packages.cadence_shared.clock import Clock, SystemClock
from packages.cadence_shared.config import CadenceSettings
from resources.substrates.postgres import SessionProvider
from services.productivity.dependencies import DependencyService, build_dependency_service
from services.productivity.energy import EnergyService, build_energy_service
from services.productivity.projects import ProjectService, build_project_service
from services.productivity.suggestions import SuggestionService, build_suggestion_service
from services.productivity.tasks import TaskService, build_task_service
from services.productivity.teams import TeamService, build_team_service
from services.productivity.users import UserService, build_user_service


@dataclass(frozen=True)
class ServiceSet:
    """Every public service instance one process exposes."""

    users: UserService
    projects: ProjectService
    tasks: TaskService
    energy: EnergyService
    teams: TeamService
    dependencies: DependencyService
    suggestions: SuggestionService


def build_services(
    *,
    settings: CadenceSettings,
    sessions: SessionProvider,
    clock: Clock | None = None,
) -> ServiceSet:
    """Build services in dependency order; suggestions compose the others."""
    clock = clock if clock is not None else SystemClock()
    users = build_user_service(sessions=sessions)
    tasks = build_task_service(sessions=sessions, clock=clock)
    energy = build_energy_service(sessions=sessions, settings=settings.energy, clock=clock)
    return ServiceSet(
        users=users,
        projects=build_project_service(sessions=sessions),
        tasks=tasks,
        energy=energy,
        teams=build_team_service(sessions=sessions, settings=settings.teams, clock=clock),
        dependencies=build_dependency_service(sessions=sessions),
        suggestions=build_suggestion_service(
            tasks=tasks,
            energy=energy,
            users=users,
            default_timezone=settings.energy.default_timezone,
            clock=clock,
        ),
    )
