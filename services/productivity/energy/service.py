"""Authoritative in-process Python API for the Energy service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock, SystemClock
from packages.cadence_shared.config import EnergySettings
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.postgres import SessionProvider
from services.productivity.energy.domain import EnergyInsightsReport, EnergyLogRecord
from services.productivity.scoring import EnergyPattern


class EnergyService(ABC):
    """Public API for energy logging, patterns, insights, and retention."""

    @abstractmethod
    def log_energy(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[EnergyLogRecord]:
        """Record one energy reading at the current time."""

    @abstractmethod
    def list_energy_logs(
        self, *, meta: EnvelopeMeta, user_id: UUID, limit: int = 100, offset: int = 0
    ) -> Envelope[list[EnergyLogRecord]]:
        """List readings newest first."""

    @abstractmethod
    def get_latest_energy(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[EnergyLogRecord]:
        """Return the most recent reading; not found when none exist."""

    @abstractmethod
    def get_energy_by_range(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        start_date: datetime | str,
        end_date: datetime | str,
    ) -> Envelope[list[EnergyLogRecord]]:
        """List readings within an inclusive range, oldest first."""

    @abstractmethod
    def get_energy_pattern(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[EnergyPattern]:
        """Derive the hour-of-day pattern over the trailing window."""

    @abstractmethod
    def get_energy_insights(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[EnergyInsightsReport]:
        """Derive the pattern, latest reading, and applicable insights."""

    @abstractmethod
    def cleanup_old_logs(
        self, *, meta: EnvelopeMeta, days_to_keep: int | None = None
    ) -> Envelope[int]:
        """Delete readings older than the retention horizon, for every user."""


def build_energy_service(
    *,
    sessions: SessionProvider,
    settings: EnergySettings | None = None,
    clock: Clock | None = None,
) -> EnergyService:
    """Build the default Energy implementation over Postgres."""
    from services.productivity.energy.data import PostgresEnergyLogRepository
    from services.productivity.energy.implementation import DefaultEnergyService

    return DefaultEnergyService(
        repository=PostgresEnergyLogRepository(sessions),
        settings=settings if settings is not None else EnergySettings(),
        clock=clock if clock is not None else SystemClock(),
    )
