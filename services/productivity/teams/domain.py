"""Domain contracts for Teams service payloads."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TeamRole(str, Enum):
    """Membership role; owners and admins may invite."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


INVITING_ROLES = frozenset({TeamRole.OWNER, TeamRole.ADMIN})


class MemberStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"


class InviteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class AnalyticsPeriod(str, Enum):
    """Trailing window for team analytics."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    ALL = "all"

    @property
    def window(self) -> timedelta | None:
        """Return the trailing window, or ``None`` for all history."""
        days = {"week": 7, "month": 30, "quarter": 90}.get(self.value)
        return None if days is None else timedelta(days=days)


class TeamOptions(BaseModel):
    """Per-team collaboration options stored as JSON on the team row."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_member_invites: bool = True
    default_member_role: TeamRole = TeamRole.MEMBER
    require_approval_for_tasks: bool = False
    energy_insights_visible: bool = True
    max_members: int = Field(default=50, ge=1, le=100)
    timezone: str = "UTC"


class TeamRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    name: str
    description: str | None
    owner_id: UUID
    settings: TeamOptions
    created_at: datetime
    updated_at: datetime


class TeamView(TeamRecord):
    """Team with its count of active members."""

    member_count: int


class TeamMemberRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    team_id: UUID
    user_id: UUID
    role: TeamRole
    status: MemberStatus
    joined_at: datetime


class TeamMemberView(TeamMemberRecord):
    """Membership joined with the member's public profile."""

    email: str
    name: str
    avatar_url: str | None


class TeamInviteRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    team_id: UUID
    email: str
    invited_by: UUID
    role: TeamRole
    token: str
    expires_at: datetime
    status: InviteStatus
    created_at: datetime


class PerformerStats(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    user_id: UUID
    name: str
    completed_tasks: int
    energy_level: float


class TeamHourlyEnergy(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    hour: int
    average_energy: float
    task_count: int


class TeamActivity(BaseModel):
    """Raw aggregates over the active members of one team."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_tasks: int
    completed_tasks: int
    average_energy: float | None
    top_performers: list[PerformerStats]
    energy_patterns: list[TeamHourlyEnergy]


class TeamAnalytics(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    team_id: UUID
    period: AnalyticsPeriod
    total_tasks: int
    completed_tasks: int
    average_energy: int
    productivity_score: int
    top_performers: list[PerformerStats]
    energy_patterns: list[TeamHourlyEnergy]
