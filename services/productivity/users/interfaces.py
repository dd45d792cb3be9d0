"""Transport-neutral protocol interfaces used by the Users service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol
from uuid import UUID

from packages.cadence_shared.unset import UNSET
from services.productivity.users.domain import UserRecord


@dataclass(frozen=True)
class UserUpdate:
    """Partial user update; ``UNSET`` fields are left untouched."""

    name: str | object = UNSET
    avatar_url: str | None | object = UNSET
    timezone: str | object = UNSET
    auth_subject: str | object = UNSET
    preferences: dict[str, Any] | object = UNSET


class UserRepository(Protocol):
    """Protocol for user account persistence."""

    def create_user(
        self,
        *,
        email: str,
        name: str,
        avatar_url: str | None,
        timezone: str,
        auth_subject: str | None,
    ) -> UserRecord:
        """Insert one user and return the stored record."""

    def get_user(self, *, user_id: UUID) -> UserRecord | None:
        """Read one user by id."""

    def get_user_by_subject(self, *, auth_subject: str) -> UserRecord | None:
        """Read one user by identity-provider subject."""

    def get_user_by_email(self, *, email: str) -> UserRecord | None:
        """Read one user by email."""

    def list_users(self, *, limit: int, offset: int) -> list[UserRecord]:
        """List users ordered by creation time, newest first."""

    def update_user(self, *, user_id: UUID, update: UserUpdate) -> UserRecord | None:
        """Apply one partial update and return the new record, if the user exists."""

    def delete_user(self, *, user_id: UUID) -> bool:
        """Delete one user and return whether it existed."""
