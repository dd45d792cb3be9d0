"""Domain contracts for Users service payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEZONE = "UTC"
DEFAULT_USER_NAME = "Cadence User"
PLACEHOLDER_EMAIL_DOMAIN = "cadence.invalid"
NOTIFICATIONS_PREFERENCE_KEY = "notifications"


class UserRecord(BaseModel):
    """Authoritative user account record."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    auth_subject: str | None
    email: str
    name: str
    avatar_url: str | None
    timezone: str
    preferences: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class NotificationPreferences(BaseModel):
    """Per-user notification switches stored under ``preferences``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    email_due_date_reminders: bool = True
    email_daily_summary: bool = True
    email_streak_alerts: bool = True
    email_weekly_report: bool = True
    email_task_suggestions: bool = True
    reminder_hours_before: int = Field(default=24, ge=1, le=72)


def notification_preferences(user: UserRecord) -> NotificationPreferences:
    """Read stored notification preferences layered over defaults."""
    stored = user.preferences.get(NOTIFICATIONS_PREFERENCE_KEY)
    if not isinstance(stored, dict):
        return NotificationPreferences()
    fields = NotificationPreferences.model_fields
    known = {key: value for key, value in stored.items() if key in fields}
    return NotificationPreferences.model_validate(known)
