"""Concrete Suggestions service implementation."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock, local_zone
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import ErrorCategory
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from services.productivity.energy.service import EnergyService
from services.productivity.suggestions.component import SERVICE_COMPONENT_ID
from services.productivity.suggestions.domain import SuggestionReport
from services.productivity.suggestions.ranking import (
    expected_energy,
    select_suggestions,
    summarize_energy,
)
from services.productivity.suggestions.service import SuggestionService
from services.productivity.suggestions.validation import AcceptSuggestionRequest
from services.productivity.tasks.domain import TaskRecord
from services.productivity.tasks.service import TaskService
from services.productivity.users.service import UserService

_LOGGER = get_logger(__name__)


class DefaultSuggestionService(SuggestionService):
    """Default Suggestions implementation composed from Tasks, Energy and Users."""

    def __init__(
        self,
        *,
        tasks: TaskService,
        energy: EnergyService,
        users: UserService,
        default_timezone: str,
        clock: Clock,
    ) -> None:
        self._tasks = tasks
        self._energy = energy
        self._users = users
        self._default_timezone = default_timezone
        self._clock = clock

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_suggestions(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[SuggestionReport]:
        user = self._users.get_user(meta=meta, user_id=user_id)
        if not user.ok:
            return failure(meta=meta, errors=user.errors)
        assert user.value is not None
        tz = local_zone(user.value.timezone, self._default_timezone)

        pattern = self._energy.get_energy_pattern(meta=meta, user_id=user_id)
        if not pattern.ok:
            return failure(meta=meta, errors=pattern.errors)
        assert pattern.value is not None

        now = self._clock.now()
        local_now = now.astimezone(tz)
        current_hour = next(
            (item for item in pattern.value.hourly_data if item.hour == local_now.hour), None
        )
        expected = expected_energy(current_hour)

        current = expected
        latest = self._energy.get_latest_energy(meta=meta, user_id=user_id)
        if latest.ok:
            assert latest.value is not None
            if latest.value.logged_at.astimezone(tz).date() == local_now.date():
                current = latest.value.energy_level
        elif not _only_not_found(latest):
            return failure(meta=meta, errors=latest.errors)

        ranked = self._tasks.list_tasks_with_energy_match(
            meta=meta, user_id=user_id, current_energy_level=current
        )
        if not ranked.ok:
            return failure(meta=meta, errors=ranked.errors)
        assert ranked.value is not None

        return success(
            meta=meta,
            payload=SuggestionReport(
                suggestions=select_suggestions(
                    ranked.value,
                    current_energy=current,
                    current_hour=current_hour,
                    now=now,
                ),
                insights=summarize_energy(
                    pattern.value.hourly_data, current_energy=current, expected=expected
                ),
                patterns_count=len(pattern.value.hourly_data),
            ),
        )

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def accept_suggestion(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        request, errors = validate_request(
            meta=meta, model=AcceptSuggestionRequest, payload=data
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        if request.schedule_time is None:
            return self._tasks.get_task(meta=meta, user_id=user_id, task_id=request.task_id)
        return self._tasks.update_task(
            meta=meta,
            user_id=user_id,
            task_id=request.task_id,
            data={"due_date": request.schedule_time},
        )


def _only_not_found(result: Envelope[Any]) -> bool:
    return bool(result.errors) and all(
        error.category == ErrorCategory.NOT_FOUND for error in result.errors
    )
