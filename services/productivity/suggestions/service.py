"""Authoritative in-process Python API for the Suggestions service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock, SystemClock
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta
from services.productivity.energy.service import EnergyService
from services.productivity.suggestions.domain import SuggestionReport
from services.productivity.tasks.domain import TaskRecord
from services.productivity.tasks.service import TaskService
from services.productivity.users.service import UserService


class SuggestionService(ABC):
    """Public API for energy-aware "what should I do now" suggestions."""

    @abstractmethod
    def get_suggestions(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[SuggestionReport]:
        """Suggest up to five pending tasks for the caller's current energy."""

    @abstractmethod
    def accept_suggestion(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        """Accept one suggested task, scheduling it when a time is given."""


def build_suggestion_service(
    *,
    tasks: TaskService,
    energy: EnergyService,
    users: UserService,
    default_timezone: str = "UTC",
    clock: Clock | None = None,
) -> SuggestionService:
    """Build the default Suggestions implementation over the owning services."""
    from services.productivity.suggestions.implementation import (
        DefaultSuggestionService,
    )

    return DefaultSuggestionService(
        tasks=tasks,
        energy=energy,
        users=users,
        default_timezone=default_timezone,
        clock=clock if clock is not None else SystemClock(),
    )
