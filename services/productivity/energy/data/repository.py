"""Postgres repository for energy logs."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, insert, select

from resources.substrates.postgres import SessionProvider
from services.productivity.energy.domain import EnergyLogRecord
from services.productivity.energy.interfaces import EnergyLogRepository
from services.productivity.users.data.schema import users

from .schema import energy_logs


class PostgresEnergyLogRepository(EnergyLogRepository):
    """SQL repository over the ``energy_logs`` table."""

    def __init__(self, sessions: SessionProvider) -> None:
        self._sessions = sessions

    def create_log(
        self,
        *,
        user_id: UUID,
        energy_level: int,
        mood_tags: list[str] | None,
        notes: str | None,
        logged_at: datetime,
    ) -> EnergyLogRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(energy_logs)
                    .values(
                        id=uuid4(),
                        user_id=user_id,
                        energy_level=energy_level,
                        mood_tags=mood_tags,
                        notes=notes,
                        logged_at=logged_at,
                    )
                    .returning(energy_logs)
                )
                .mappings()
                .one()
            )
            return EnergyLogRecord.model_validate(dict(row))

    def list_logs(self, *, user_id: UUID, limit: int, offset: int) -> list[EnergyLogRecord]:
        return self._many(
            select(energy_logs)
            .where(energy_logs.c.user_id == user_id)
            .order_by(energy_logs.c.logged_at.desc())
            .limit(limit)
            .offset(offset)
        )

    def latest_log(self, *, user_id: UUID) -> EnergyLogRecord | None:
        rows = self.list_logs(user_id=user_id, limit=1, offset=0)
        return rows[0] if rows else None

    def logs_between(
        self, *, user_id: UUID, start: datetime, end: datetime
    ) -> list[EnergyLogRecord]:
        return self._many(
            select(energy_logs)
            .where(
                energy_logs.c.user_id == user_id,
                energy_logs.c.logged_at >= start,
                energy_logs.c.logged_at <= end,
            )
            .order_by(energy_logs.c.logged_at.asc())
        )

    def logs_since(self, *, user_id: UUID, since: datetime) -> list[EnergyLogRecord]:
        return self._many(
            select(energy_logs)
            .where(energy_logs.c.user_id == user_id, energy_logs.c.logged_at > since)
            .order_by(energy_logs.c.logged_at.asc())
        )

    def user_timezone(self, *, user_id: UUID) -> str | None:
        with self._sessions.session() as session:
            return session.execute(
                select(users.c.timezone).where(users.c.id == user_id)
            ).scalar_one_or_none()

    def delete_logs_before(self, *, cutoff: datetime) -> int:
        with self._sessions.session() as session:
            result = session.execute(
                delete(energy_logs).where(energy_logs.c.logged_at < cutoff)
            )
            return int(result.rowcount or 0)

    def _many(self, statement) -> list[EnergyLogRecord]:
        with self._sessions.session() as session:
            rows = session.execute(statement).mappings().all()
            return [EnergyLogRecord.model_validate(dict(row)) for row in rows]
