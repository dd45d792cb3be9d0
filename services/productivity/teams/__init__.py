"""Teams service native package exports."""

from services.productivity.teams.component import SERVICE_COMPONENT_ID
from services.productivity.teams.domain import (
    AnalyticsPeriod,
    TeamAnalytics,
    TeamInviteRecord,
    TeamMemberView,
    TeamRole,
    TeamView,
)
from services.productivity.teams.implementation import DefaultTeamService
from services.productivity.teams.service import TeamService, build_team_service

__all__ = [
    "AnalyticsPeriod",
    "DefaultTeamService",
    "SERVICE_COMPONENT_ID",
    "TeamAnalytics",
    "TeamInviteRecord",
    "TeamMemberView",
    "TeamRole",
    "TeamService",
    "TeamView",
    "build_team_service",
]
