"""Transport-neutral protocol interfaces used by the Energy service."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from services.productivity.energy.domain import EnergyLogRecord


class EnergyLogRepository(Protocol):
    """Protocol for owner-scoped energy log persistence."""

    def create_log(
        self,
        *,
        user_id: UUID,
        energy_level: int,
        mood_tags: list[str] | None,
        notes: str | None,
        logged_at: datetime,
    ) -> EnergyLogRecord:
        """Insert one reading and return the stored record."""

    def list_logs(self, *, user_id: UUID, limit: int, offset: int) -> list[EnergyLogRecord]:
        """List readings newest first."""

    def latest_log(self, *, user_id: UUID) -> EnergyLogRecord | None:
        """Return the most recent reading."""

    def logs_between(
        self, *, user_id: UUID, start: datetime, end: datetime
    ) -> list[EnergyLogRecord]:
        """List readings in ``[start, end]`` oldest first."""

    def logs_since(self, *, user_id: UUID, since: datetime) -> list[EnergyLogRecord]:
        """List readings strictly after ``since``."""

    def user_timezone(self, *, user_id: UUID) -> str | None:
        """Return the user's IANA timezone name, if the user exists."""

    def delete_logs_before(self, *, cutoff: datetime) -> int:
        """Delete every reading older than ``cutoff`` and return the count."""
