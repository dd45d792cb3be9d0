"""Concrete Tasks service implementation."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import codes, conflict_error, not_found_error
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from resources.substrates.postgres import storage_failure
from services.productivity.scoring import (
    DEFAULT_ENERGY_REQUIREMENT,
    DEFAULT_PRIORITY,
    calculate_base_points,
    completion_bonus,
    match_energy,
    rank_energy_matches,
)
from services.productivity.tasks.component import SERVICE_COMPONENT_ID
from services.productivity.tasks.domain import (
    TaskCompletion,
    TaskRecord,
    TaskStats,
    TaskStatus,
    TaskView,
    TaskWithEnergyMatch,
)
from services.productivity.tasks.interfaces import (
    NewTask,
    TaskFilters,
    TaskRepository,
    TaskUpdate,
)
from services.productivity.tasks.service import TaskService
from services.productivity.tasks.validation import (
    CompleteTaskRequest,
    CreateTaskRequest,
    EnergyMatchRequest,
    ListTasksRequest,
    UpdateTaskRequest,
    stamp_notes,
    stamp_subtasks,
)

_LOGGER = get_logger(__name__)
_STATS_WINDOW = timedelta(days=7)
_PLAIN_UPDATE_FIELDS = (
    "title",
    "description",
    "energy_requirement",
    "priority",
    "project_id",
    "due_date",
    "estimated_duration",
    "tags",
    "recurrence",
)


class DefaultTaskService(TaskService):
    """Default Tasks implementation backed by a ``TaskRepository``."""

    def __init__(self, *, repository: TaskRepository, clock: Clock) -> None:
        self._repository = repository
        self._clock = clock

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def create_task(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        request, errors = validate_request(meta=meta, model=CreateTaskRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        priority = request.priority if request.priority is not None else DEFAULT_PRIORITY
        energy_requirement = (
            request.energy_requirement
            if request.energy_requirement is not None
            else DEFAULT_ENERGY_REQUIREMENT
        )
        now = self._clock.now()
        try:
            if request.project_id is not None and not self._repository.project_exists(
                user_id=user_id, project_id=request.project_id
            ):
                return _project_not_found(meta, request.project_id)
            created = self._repository.create_task(
                user_id=user_id,
                task=NewTask(
                    project_id=request.project_id,
                    title=request.title,
                    description=request.description,
                    energy_requirement=energy_requirement,
                    priority=priority,
                    due_date=request.due_date,
                    estimated_duration=request.estimated_duration,
                    points=calculate_base_points(priority, energy_requirement),
                    tags=list(request.tags),
                    subtasks=stamp_subtasks(request.subtasks, now),
                    notes=stamp_notes(request.notes, now),
                    recurrence=request.recurrence,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="create_task", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id", "task_id")
    )
    def get_task(
        self, *, meta: EnvelopeMeta, user_id: UUID, task_id: UUID
    ) -> Envelope[TaskRecord]:
        try:
            task = self._repository.get_task(user_id=user_id, task_id=task_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="get_task", exc=exc, logger=_LOGGER)
        if task is None:
            return _task_not_found(meta, task_id)
        return success(meta=meta, payload=task)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def list_tasks(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        status: str | None = None,
        project_id: str | UUID | None = None,
        priority: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Envelope[list[TaskView]]:
        request, errors = validate_request(
            meta=meta,
            model=ListTasksRequest,
            payload={
                "status": status,
                "project_id": project_id,
                "priority": priority,
                "limit": limit,
                "offset": offset,
            },
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            rows = self._repository.list_tasks(
                user_id=user_id,
                filters=TaskFilters(
                    status=request.status,
                    project_id=request.project_id,
                    priority=request.priority,
                ),
                limit=request.limit,
                offset=request.offset,
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="list_tasks", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=rows)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def list_tasks_with_energy_match(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        current_energy_level: int,
        project_id: str | UUID | None = None,
        priority: int | None = None,
    ) -> Envelope[list[TaskWithEnergyMatch]]:
        request, errors = validate_request(
            meta=meta,
            model=EnergyMatchRequest,
            payload={
                "current_energy_level": current_energy_level,
                "project_id": project_id,
                "priority": priority,
            },
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            rows = self._repository.list_pending_by_energy_match(
                user_id=user_id,
                current_energy_level=request.current_energy_level,
                filters=TaskFilters(
                    status=TaskStatus.PENDING,
                    project_id=request.project_id,
                    priority=request.priority,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="list_tasks_with_energy_match", exc=exc, logger=_LOGGER
            )

        scored = [
            TaskWithEnergyMatch.model_validate(
                {
                    **row.model_dump(),
                    **match_energy(
                        points=row.points,
                        energy_requirement=row.energy_requirement,
                        current_energy_level=request.current_energy_level,
                    ).model_dump(),
                }
            )
            for row in rows
        ]
        return success(meta=meta, payload=rank_energy_matches(scored))

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id", "task_id")
    )
    def update_task(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[TaskRecord]:
        request, errors = validate_request(meta=meta, model=UpdateTaskRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        supplied = request.model_fields_set
        values: dict[str, Any] = {
            name: getattr(request, name) for name in _PLAIN_UPDATE_FIELDS if name in supplied
        }
        now = self._clock.now()
        if "subtasks" in supplied:
            values["subtasks"] = stamp_subtasks(request.subtasks or [], now)
        if "notes" in supplied:
            values["notes"] = stamp_notes(request.notes or [], now)

        try:
            if "priority" in supplied or "energy_requirement" in supplied:
                current = self._repository.get_task(user_id=user_id, task_id=task_id)
                if current is None:
                    return _task_not_found(meta, task_id)
                values["points"] = calculate_base_points(
                    values.get("priority", current.priority),
                    values.get("energy_requirement", current.energy_requirement),
                )
            project_id = values.get("project_id")
            if project_id is not None and not self._repository.project_exists(
                user_id=user_id, project_id=project_id
            ):
                return _project_not_found(meta, project_id)
            updated = self._repository.update_task(
                user_id=user_id, task_id=task_id, update=TaskUpdate(**values)
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="update_task", exc=exc, logger=_LOGGER)
        if updated is None:
            return _task_not_found(meta, task_id)
        return success(meta=meta, payload=updated)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id", "task_id")
    )
    def complete_task(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        data: Mapping[str, Any] | None = None,
    ) -> Envelope[TaskCompletion]:
        """Complete one pending task.

        The bonus is a quarter of the task's points, awarded only when the
        supplied current energy level equals the task's requirement.
        """
        request, errors = validate_request(meta=meta, model=CompleteTaskRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            task = self._repository.get_task(user_id=user_id, task_id=task_id)
            if task is None:
                return _task_not_found(meta, task_id)
            if task.status == TaskStatus.COMPLETED:
                return _already_completed(meta, task_id)
            completed = self._repository.complete_task(
                user_id=user_id,
                task_id=task_id,
                completed_at=self._clock.now(),
                actual_duration=request.actual_duration,
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="complete_task", exc=exc, logger=_LOGGER)
        if completed is None:
            return _already_completed(meta, task_id)

        bonus = completion_bonus(
            points=task.points,
            energy_requirement=task.energy_requirement,
            current_energy_level=request.current_energy_level,
        )
        return success(
            meta=meta,
            payload=TaskCompletion(
                task=completed,
                points_earned=task.points + bonus,
                bonus_points=bonus,
                energy_match_bonus=bonus > 0,
            ),
        )

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id", "task_id")
    )
    def delete_task(
        self, *, meta: EnvelopeMeta, user_id: UUID, task_id: UUID
    ) -> Envelope[bool]:
        try:
            deleted = self._repository.delete_task(user_id=user_id, task_id=task_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="delete_task", exc=exc, logger=_LOGGER)
        if not deleted:
            return _task_not_found(meta, task_id)
        return success(meta=meta, payload=True)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_task_stats(self, *, meta: EnvelopeMeta, user_id: UUID) -> Envelope[TaskStats]:
        try:
            stats = self._repository.get_task_stats(
                user_id=user_id, week_start=self._clock.now() - _STATS_WINDOW
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="get_task_stats", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=stats)


def _task_not_found(meta: EnvelopeMeta, task_id: UUID) -> Envelope[Any]:
    return failure(
        meta=meta,
        errors=[
            not_found_error(
                "Task not found",
                code=codes.RESOURCE_NOT_FOUND,
                metadata={"task_id": str(task_id)},
            )
        ],
    )


def _project_not_found(meta: EnvelopeMeta, project_id: UUID) -> Envelope[Any]:
    return failure(
        meta=meta,
        errors=[
            not_found_error(
                "Project not found",
                code=codes.RESOURCE_NOT_FOUND,
                metadata={"project_id": str(project_id)},
            )
        ],
    )


def _already_completed(meta: EnvelopeMeta, task_id: UUID) -> Envelope[Any]:
    return failure(
        meta=meta,
        errors=[
            conflict_error(
                "Task is already completed",
                code=codes.INVALID_STATE,
                metadata={"task_id": str(task_id)},
            )
        ],
    )
