"""Pydantic request-validation models for the Users service."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _ValidationModel(BaseModel):
    """Base request model with strict shape semantics."""

    model_config = ConfigDict(frozen=True, extra="forbid")


def _check_timezone(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"unknown timezone '{value}'") from None
    return value


class CreateUserRequest(_ValidationModel):
    """Validated create-user request."""

    email: str = Field(max_length=255, pattern=_EMAIL_PATTERN)
    name: str = Field(min_length=1, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=2048)
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _timezone_known(cls, value: str | None) -> str | None:
        return _check_timezone(value)


class UpdateUserRequest(_ValidationModel):
    """Validated partial user update; only supplied fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=2048)
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _timezone_required_when_present(cls, value: str | None) -> str | None:
        if value is None:
            raise ValueError("timezone cannot be null")
        return _check_timezone(value)

    @field_validator("name")
    @classmethod
    def _name_required_when_present(cls, value: str | None) -> str | None:
        if value is None:
            raise ValueError("name cannot be null")
        return value


class SyncIdentityRequest(_ValidationModel):
    """Identity-provider claims used to find or create a local user."""

    subject: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    name: str | None = Field(default=None, max_length=255)


class ListUsersRequest(_ValidationModel):
    """Pagination for user listing."""

    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class UpdateNotificationPreferencesRequest(_ValidationModel):
    """Partial notification preference update."""

    email_due_date_reminders: bool | None = None
    email_daily_summary: bool | None = None
    email_streak_alerts: bool | None = None
    email_weekly_report: bool | None = None
    email_task_suggestions: bool | None = None
    reminder_hours_before: int | None = Field(default=None, ge=1, le=72)
