"""Authoritative in-process Python API for the Teams service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock, SystemClock
from packages.cadence_shared.config import TeamSettings
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.postgres import SessionProvider
from services.productivity.teams.domain import (
    TeamAnalytics,
    TeamInviteRecord,
    TeamMemberView,
    TeamView,
)


class TeamService(ABC):
    """Public API for teams, memberships, invitations and team analytics."""

    @abstractmethod
    def create_team(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[TeamView]:
        """Create one team owned by ``user_id``."""

    @abstractmethod
    def get_team(
        self, *, meta: EnvelopeMeta, user_id: UUID, team_id: UUID
    ) -> Envelope[TeamView]:
        """Read one team; members only."""

    @abstractmethod
    def list_members(
        self, *, meta: EnvelopeMeta, user_id: UUID, team_id: UUID
    ) -> Envelope[list[TeamMemberView]]:
        """List one team's members; members only."""

    @abstractmethod
    def invite_member(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        team_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[TeamInviteRecord]:
        """Issue an invitation token; owners and admins only."""

    @abstractmethod
    def get_team_analytics(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        team_id: UUID,
        period: str = "week",
    ) -> Envelope[TeamAnalytics]:
        """Summarize team throughput and energy over a trailing period."""


def build_team_service(
    *,
    sessions: SessionProvider,
    settings: TeamSettings | None = None,
    clock: Clock | None = None,
) -> TeamService:
    """Build the default Teams implementation over Postgres."""
    from services.productivity.teams.data import PostgresTeamRepository
    from services.productivity.teams.implementation import DefaultTeamService

    return DefaultTeamService(
        repository=PostgresTeamRepository(sessions),
        settings=settings if settings is not None else TeamSettings(),
        clock=clock if clock is not None else SystemClock(),
    )
