"""Concrete Projects service implementation."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import codes, not_found_error
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from resources.substrates.postgres import storage_failure
from services.productivity.projects.component import SERVICE_COMPONENT_ID
from services.productivity.projects.domain import (
    ProjectRecord,
    ProjectStatus,
    ProjectWithStats,
)
from services.productivity.projects.interfaces import (
    NewProject,
    ProjectRepository,
    ProjectUpdate,
)
from services.productivity.projects.service import ProjectService
from services.productivity.projects.validation import (
    CreateProjectRequest,
    ListProjectsRequest,
    UpdateProjectRequest,
)

_LOGGER = get_logger(__name__)
_UPDATABLE_FIELDS = ("name", "description", "color", "energy_requirement", "priority")


class DefaultProjectService(ProjectService):
    """Default Projects implementation backed by a ``ProjectRepository``."""

    def __init__(self, *, repository: ProjectRepository) -> None:
        self._repository = repository

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def create_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[ProjectRecord]:
        request, errors = validate_request(meta=meta, model=CreateProjectRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            created = self._repository.create_project(
                user_id=user_id,
                project=NewProject(
                    name=request.name,
                    description=request.description,
                    color=request.color,
                    energy_requirement=request.energy_requirement,
                    priority=request.priority,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="create_project", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def list_projects(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        status: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Envelope[list[ProjectRecord]]:
        request, errors = validate_request(
            meta=meta,
            model=ListProjectsRequest,
            payload={"status": status, "limit": limit, "offset": offset},
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            rows = self._repository.list_projects(
                user_id=user_id,
                status=request.status,
                limit=request.limit,
                offset=request.offset,
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="list_projects", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=rows)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "project_id"),
    )
    def get_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, project_id: UUID
    ) -> Envelope[ProjectWithStats]:
        try:
            project = self._repository.get_project_with_stats(
                user_id=user_id, project_id=project_id
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="get_project", exc=exc, logger=_LOGGER)
        if project is None:
            return _project_not_found(meta, project_id)
        return success(meta=meta, payload=project)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "project_id"),
    )
    def update_project(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        project_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[ProjectRecord]:
        request, errors = validate_request(meta=meta, model=UpdateProjectRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        supplied = request.model_fields_set
        update = ProjectUpdate(
            **{name: getattr(request, name) for name in _UPDATABLE_FIELDS if name in supplied}
        )
        return self._apply_update(
            meta=meta,
            user_id=user_id,
            project_id=project_id,
            update=update,
            operation="update_project",
        )

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "project_id"),
    )
    def archive_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, project_id: UUID
    ) -> Envelope[ProjectRecord]:
        return self._apply_update(
            meta=meta,
            user_id=user_id,
            project_id=project_id,
            update=ProjectUpdate(status=ProjectStatus.ARCHIVED),
            operation="archive_project",
        )

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "project_id"),
    )
    def delete_project(
        self, *, meta: EnvelopeMeta, user_id: UUID, project_id: UUID
    ) -> Envelope[bool]:
        try:
            deleted = self._repository.delete_project(user_id=user_id, project_id=project_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="delete_project", exc=exc, logger=_LOGGER)
        if not deleted:
            return _project_not_found(meta, project_id)
        return success(meta=meta, payload=True)

    def _apply_update(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        project_id: UUID,
        update: ProjectUpdate,
        operation: str,
    ) -> Envelope[ProjectRecord]:
        try:
            updated = self._repository.update_project(
                user_id=user_id, project_id=project_id, update=update
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation=operation, exc=exc, logger=_LOGGER)
        if updated is None:
            return _project_not_found(meta, project_id)
        return success(meta=meta, payload=updated)


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
