"""Concrete Task Dependencies service implementation."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import (
    codes,
    conflict_error,
    not_found_error,
    validation_error,
)
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from resources.substrates.postgres import storage_failure
from services.productivity.dependencies.component import SERVICE_COMPONENT_ID
from services.productivity.dependencies.domain import (
    DependencyOverview,
    TaskDependencyRecord,
    can_complete,
)
from services.productivity.dependencies.graph import creates_cycle
from services.productivity.dependencies.interfaces import DependencyRepository
from services.productivity.dependencies.service import DependencyService
from services.productivity.dependencies.validation import AddDependencyRequest

_LOGGER = get_logger(__name__)


class DefaultDependencyService(DependencyService):
    """Default Task Dependencies implementation backed by a ``DependencyRepository``."""

    def __init__(self, *, repository: DependencyRepository) -> None:
        self._repository = repository

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "task_id"),
    )
    def add_dependency(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[TaskDependencyRecord]:
        request, errors = validate_request(meta=meta, model=AddDependencyRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        depends_on = request.depends_on_task_id
        if depends_on == task_id:
            return failure(
                meta=meta,
                errors=[
                    validation_error(
                        "A task cannot depend on itself",
                        code=codes.INVALID_ARGUMENT,
                        metadata={"task_id": str(task_id)},
                    )
                ],
            )

        try:
            if not self._repository.task_owned(user_id=user_id, task_id=task_id):
                return _task_not_found(meta, "Task not found", task_id)
            if not self._repository.task_owned(user_id=user_id, task_id=depends_on):
                return _task_not_found(meta, "Dependency task not found", depends_on)
            if self._repository.dependency_exists(
                task_id=task_id, depends_on_task_id=depends_on
            ):
                return failure(
                    meta=meta,
                    errors=[
                        conflict_error(
                            "Dependency already exists",
                            code=codes.ALREADY_EXISTS,
                            metadata={
                                "task_id": str(task_id),
                                "depends_on_task_id": str(depends_on),
                            },
                        )
                    ],
                )
            if creates_cycle(
                task_id,
                depends_on,
                lambda node: self._repository.prerequisite_ids(task_id=node),
            ):
                return failure(
                    meta=meta,
                    errors=[
                        validation_error(
                            "Circular dependency detected",
                            code=codes.INVALID_ARGUMENT,
                            metadata={
                                "task_id": str(task_id),
                                "depends_on_task_id": str(depends_on),
                            },
                        )
                    ],
                )
            created = self._repository.create_dependency(
                task_id=task_id, depends_on_task_id=depends_on, type=request.type
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="add_dependency", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "task_id"),
    )
    def get_dependencies(
        self, *, meta: EnvelopeMeta, user_id: UUID, task_id: UUID
    ) -> Envelope[DependencyOverview]:
        try:
            if not self._repository.task_owned(user_id=user_id, task_id=task_id):
                return _task_not_found(meta, "Task not found", task_id)
            prerequisites = self._repository.list_prerequisites(task_id=task_id)
            dependents = self._repository.list_dependents(task_id=task_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_dependencies", exc=exc, logger=_LOGGER
            )
        return success(
            meta=meta,
            payload=DependencyOverview(
                dependencies=prerequisites,
                dependents=dependents,
                can_complete=can_complete(prerequisites),
            ),
        )

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "task_id", "dependency_id"),
    )
    def remove_dependency(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        task_id: UUID,
        dependency_id: UUID,
    ) -> Envelope[bool]:
        try:
            if not self._repository.task_owned(user_id=user_id, task_id=task_id):
                return _task_not_found(meta, "Task not found", task_id)
            deleted = self._repository.delete_dependency(
                task_id=task_id, dependency_id=dependency_id
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="remove_dependency", exc=exc, logger=_LOGGER
            )
        if not deleted:
            return failure(
                meta=meta,
                errors=[
                    not_found_error(
                        "Dependency not found",
                        code=codes.RESOURCE_NOT_FOUND,
                        metadata={"dependency_id": str(dependency_id)},
                    )
                ],
            )
        return success(meta=meta, payload=True)


def _task_not_found(meta: EnvelopeMeta, message: str, task_id: UUID) -> Envelope[Any]:
    return failure(
        meta=meta,
        errors=[
            not_found_error(
                message,
                code=codes.RESOURCE_NOT_FOUND,
                metadata={"task_id": str(task_id)},
            )
        ],
    )
