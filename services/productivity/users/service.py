"""Authoritative in-process Python API for the Users service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.postgres import SessionProvider
from services.productivity.users.domain import NotificationPreferences, UserRecord


class UserService(ABC):
    """Public API for user accounts, identity sync, and preferences."""

    @abstractmethod
    def create_user(
        self, *, meta: EnvelopeMeta, data: Mapping[str, Any]
    ) -> Envelope[UserRecord]:
        """Create one user; duplicate email is a conflict."""

    @abstractmethod
    def get_user(self, *, meta: EnvelopeMeta, user_id: UUID) -> Envelope[UserRecord]:
        """Read one user by id."""

    @abstractmethod
    def list_users(
        self, *, meta: EnvelopeMeta, limit: int = 100, offset: int = 0
    ) -> Envelope[list[UserRecord]]:
        """List users newest first."""

    @abstractmethod
    def update_user(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[UserRecord]:
        """Apply the supplied name/avatar_url/timezone fields."""

    @abstractmethod
    def delete_user(self, *, meta: EnvelopeMeta, user_id: UUID) -> Envelope[bool]:
        """Delete one user and everything it owns."""

    @abstractmethod
    def sync_identity(
        self,
        *,
        meta: EnvelopeMeta,
        subject: str,
        email: str | None = None,
        name: str | None = None,
    ) -> Envelope[UserRecord]:
        """Find or create the local user for an identity-provider subject."""

    @abstractmethod
    def get_notification_preferences(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[NotificationPreferences]:
        """Read notification preferences with defaults applied."""

    @abstractmethod
    def update_notification_preferences(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[NotificationPreferences]:
        """Merge supplied notification preference fields."""


def build_user_service(*, sessions: SessionProvider) -> UserService:
    """Build the default Users implementation over Postgres."""
    from services.productivity.users.data import PostgresUserRepository
    from services.productivity.users.implementation import DefaultUserService

    return DefaultUserService(repository=PostgresUserRepository(sessions))
