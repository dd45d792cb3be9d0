"""Data-layer exports for the Teams service."""

from services.productivity.teams.data.repository import PostgresTeamRepository
from services.productivity.teams.data.schema import team_invites, team_members, teams

__all__ = ["PostgresTeamRepository", "team_invites", "team_members", "teams"]
