"""Pydantic request-validation models for the Teams service."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.productivity.teams.domain import AnalyticsPeriod, TeamRole

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _ValidationModel(BaseModel):
    """Base request model with strict shape semantics."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class TeamOptionsInput(_ValidationModel):
    """Caller-supplied team options; omitted keys keep their defaults."""

    allow_member_invites: bool | None = None
    default_member_role: TeamRole | None = None
    require_approval_for_tasks: bool | None = None
    energy_insights_visible: bool | None = None
    max_members: int | None = Field(default=None, ge=1, le=100)
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _timezone_known(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone '{value}'") from None
        return value


class CreateTeamRequest(_ValidationModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    settings: TeamOptionsInput | None = None


class InviteMemberRequest(_ValidationModel):
    """Invitation; an omitted role falls back to the team's default role."""

    email: str = Field(max_length=255, pattern=_EMAIL_PATTERN)
    role: TeamRole | None = None


class TeamAnalyticsRequest(_ValidationModel):
    period: AnalyticsPeriod = AnalyticsPeriod.WEEK
