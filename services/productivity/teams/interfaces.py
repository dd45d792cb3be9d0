"""Transport-neutral protocol interfaces used by the Teams service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from services.productivity.teams.domain import (
    TeamActivity,
    TeamInviteRecord,
    TeamMemberRecord,
    TeamMemberView,
    TeamOptions,
    TeamRecord,
    TeamRole,
    TeamView,
)


@dataclass(frozen=True)
class NewTeam:
    name: str
    description: str | None
    settings: TeamOptions


@dataclass(frozen=True)
class NewInvite:
    team_id: UUID
    email: str
    invited_by: UUID
    role: TeamRole
    token: str
    expires_at: datetime


class TeamRepository(Protocol):
    """Protocol for team, membership and invitation persistence."""

    def create_team(self, *, owner_id: UUID, team: NewTeam) -> TeamRecord:
        """Insert one team and its owner's active membership atomically."""

    def get_membership(self, *, team_id: UUID, user_id: UUID) -> TeamMemberRecord | None:
        """Read one user's membership in one team."""

    def get_team(self, *, team_id: UUID) -> TeamView | None:
        """Read one team with its active member count."""

    def list_members(self, *, team_id: UUID) -> list[TeamMemberView]:
        """List memberships with profiles, most recently joined first."""

    def create_invite(self, *, invite: NewInvite) -> TeamInviteRecord:
        """Insert one pending invitation."""

    def team_activity(
        self, *, team_id: UUID, since: datetime | None, timezone: str, limit: int
    ) -> TeamActivity:
        """Aggregate tasks and energy logs of the team's active members."""
