"""Postgres repository for user accounts."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, insert, select, update

from packages.cadence_shared.unset import assigned_values
from resources.substrates.postgres import SessionProvider
from services.productivity.users.domain import UserRecord
from services.productivity.users.interfaces import UserRepository, UserUpdate

from .schema import users


class PostgresUserRepository(UserRepository):
    """SQL repository over the ``users`` table."""

    def __init__(self, sessions: SessionProvider) -> None:
        self._sessions = sessions

    def create_user(
        self,
        *,
        email: str,
        name: str,
        avatar_url: str | None,
        timezone: str,
        auth_subject: str | None,
    ) -> UserRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(users)
                    .values(
                        id=uuid4(),
                        email=email,
                        name=name,
                        avatar_url=avatar_url,
                        timezone=timezone,
                        auth_subject=auth_subject,
                        preferences={},
                    )
                    .returning(users)
                )
                .mappings()
                .one()
            )
            return _to_user(row)

    def get_user(self, *, user_id: UUID) -> UserRecord | None:
        return self._one(users.c.id == user_id)

    def get_user_by_subject(self, *, auth_subject: str) -> UserRecord | None:
        return self._one(users.c.auth_subject == auth_subject)

    def get_user_by_email(self, *, email: str) -> UserRecord | None:
        return self._one(users.c.email == email)

    def list_users(self, *, limit: int, offset: int) -> list[UserRecord]:
        with self._sessions.session() as session:
            rows = (
                session.execute(
                    select(users)
                    .order_by(users.c.created_at.desc())
                    .limit(limit)
                    .offset(offset)
                )
                .mappings()
                .all()
            )
            return [_to_user(row) for row in rows]

    def update_user(self, *, user_id: UUID, update: UserUpdate) -> UserRecord | None:
        values = assigned_values(update)
        if not values:
            return self.get_user(user_id=user_id)
        with self._sessions.session() as session:
            row = (
                session.execute(
                    update(users)
                    .where(users.c.id == user_id)
                    .values(**values)
                    .returning(users)
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_user(row)

    def delete_user(self, *, user_id: UUID) -> bool:
        with self._sessions.session() as session:
            result = session.execute(delete(users).where(users.c.id == user_id))
            return int(result.rowcount or 0) > 0

    def _one(self, condition: Any) -> UserRecord | None:
        with self._sessions.session() as session:
            row = session.execute(select(users).where(condition)).mappings().one_or_none()
            return None if row is None else _to_user(row)


def _to_user(row: Any) -> UserRecord:
    """Map one SQL row to a strict user record."""
    return UserRecord.model_validate(dict(row))
