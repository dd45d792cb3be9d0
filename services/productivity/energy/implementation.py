"""Concrete Energy service implementation."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Mapping
from uuid import UUID
from zoneinfo import ZoneInfo

from packages.cadence_shared.clock import Clock, local_zone
from packages.cadence_shared.config import EnergySettings
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import codes, not_found_error
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from resources.substrates.postgres import storage_failure
from services.productivity.energy.component import SERVICE_COMPONENT_ID
from services.productivity.energy.domain import EnergyInsightsReport, EnergyLogRecord
from services.productivity.energy.interfaces import EnergyLogRepository
from services.productivity.energy.service import EnergyService
from services.productivity.energy.validation import (
    CleanupRequest,
    EnergyRangeRequest,
    ListEnergyLogsRequest,
    LogEnergyRequest,
)
from services.productivity.scoring import (
    EnergyPattern,
    calculate_energy_pattern,
    generate_energy_insights,
)

_LOGGER = get_logger(__name__)


class DefaultEnergyService(EnergyService):
    """Default Energy implementation backed by an ``EnergyLogRepository``."""

    def __init__(
        self,
        *,
        repository: EnergyLogRepository,
        settings: EnergySettings,
        clock: Clock,
    ) -> None:
        self._repository = repository
        self._settings = settings
        self._clock = clock

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def log_energy(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[EnergyLogRecord]:
        request, errors = validate_request(meta=meta, model=LogEnergyRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            created = self._repository.create_log(
                user_id=user_id,
                energy_level=request.energy_level,
                mood_tags=request.mood_tags,
                notes=request.notes,
                logged_at=self._clock.now(),
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="log_energy", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def list_energy_logs(
        self, *, meta: EnvelopeMeta, user_id: UUID, limit: int = 100, offset: int = 0
    ) -> Envelope[list[EnergyLogRecord]]:
        request, errors = validate_request(
            meta=meta,
            model=ListEnergyLogsRequest,
            payload={"limit": limit, "offset": offset},
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            rows = self._repository.list_logs(
                user_id=user_id, limit=request.limit, offset=request.offset
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="list_energy_logs", exc=exc, logger=_LOGGER
            )
        return success(meta=meta, payload=rows)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_latest_energy(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[EnergyLogRecord]:
        try:
            latest = self._repository.latest_log(user_id=user_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_latest_energy", exc=exc, logger=_LOGGER
            )
        if latest is None:
            return failure(
                meta=meta,
                errors=[
                    not_found_error(
                        "No energy logs found",
                        code=codes.RESOURCE_NOT_FOUND,
                        metadata={"user_id": str(user_id)},
                    )
                ],
            )
        return success(meta=meta, payload=latest)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_energy_by_range(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        start_date: datetime | str,
        end_date: datetime | str,
    ) -> Envelope[list[EnergyLogRecord]]:
        request, errors = validate_request(
            meta=meta,
            model=EnergyRangeRequest,
            payload={"start_date": start_date, "end_date": end_date},
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            rows = self._repository.logs_between(
                user_id=user_id, start=request.start_date, end=request.end_date
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_energy_by_range", exc=exc, logger=_LOGGER
            )
        return success(meta=meta, payload=rows)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_energy_pattern(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[EnergyPattern]:
        try:
            pattern, _ = self._pattern(user_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_energy_pattern", exc=exc, logger=_LOGGER
            )
        return success(meta=meta, payload=pattern)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_energy_insights(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[EnergyInsightsReport]:
        """Evaluate insight rules with the current hour in the user's timezone."""
        try:
            pattern, tz = self._pattern(user_id)
            latest = self._repository.latest_log(user_id=user_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_energy_insights", exc=exc, logger=_LOGGER
            )
        current_hour = self._clock.now().astimezone(tz).hour
        return success(
            meta=meta,
            payload=EnergyInsightsReport(
                pattern=pattern,
                latest=latest,
                insights=generate_energy_insights(pattern, latest, current_hour),
            ),
        )

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def cleanup_old_logs(
        self, *, meta: EnvelopeMeta, days_to_keep: int | None = None
    ) -> Envelope[int]:
        request, errors = validate_request(
            meta=meta,
            model=CleanupRequest,
            payload={
                "days_to_keep": (
                    days_to_keep
                    if days_to_keep is not None
                    else self._settings.retention_days
                )
            },
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        cutoff = self._clock.now() - timedelta(days=request.days_to_keep)
        try:
            deleted = self._repository.delete_logs_before(cutoff=cutoff)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="cleanup_old_logs", exc=exc, logger=_LOGGER
            )
        _LOGGER.info(
            "Deleted expired energy logs: deleted=%s days_to_keep=%s",
            deleted,
            request.days_to_keep,
        )
        return success(meta=meta, payload=deleted)

    def _pattern(self, user_id: UUID) -> tuple[EnergyPattern, ZoneInfo]:
        tz = local_zone(
            self._repository.user_timezone(user_id=user_id),
            self._settings.default_timezone,
        )
        since = self._clock.now() - timedelta(days=self._settings.pattern_window_days)
        logs = self._repository.logs_since(user_id=user_id, since=since)
        return calculate_energy_pattern(user_id, logs, tz), tz
