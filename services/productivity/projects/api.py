"""HTTP routes for the Projects service."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from packages.cadence_shared.envelope import EnvelopeKind
from packages.cadence_shared.http import (
    Principal,
    PrincipalDependency,
    envelope_response,
    request_meta,
)
from services.productivity.projects.service import ProjectService


def register_routes(
    *,
    router: APIRouter,
    service: ProjectService,
    current_principal: PrincipalDependency,
) -> None:
    """Register owner-scoped project routes."""

    @router.post("/api/projects")
    def create_project(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.create_project(meta=meta, user_id=principal.user_id, data=payload)
        return envelope_response(result, status_code=201, key="project")

    @router.get("/api/projects")
    def list_projects(
        request: Request,
        status: str | None = None,
        limit: int = 100,
        offset: int = 0,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.list_projects(
            meta=meta,
            user_id=principal.user_id,
            status=status,
            limit=limit,
            offset=offset,
        )
        return envelope_response(result, key="projects")

    @router.get("/api/projects/{project_id}")
    def read_project(
        request: Request,
        project_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_project(
            meta=meta, user_id=principal.user_id, project_id=project_id
        )
        return envelope_response(result, key="project")

    @router.put("/api/projects/{project_id}")
    def update_project(
        request: Request,
        project_id: UUID,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.update_project(
            meta=meta, user_id=principal.user_id, project_id=project_id, data=payload
        )
        return envelope_response(result, key="project")

    @router.post("/api/projects/{project_id}/archive")
    def archive_project(
        request: Request,
        project_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.archive_project(
            meta=meta, user_id=principal.user_id, project_id=project_id
        )
        return envelope_response(result, key="project")

    @router.delete("/api/projects/{project_id}")
    def delete_project(
        request: Request,
        project_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.delete_project(
            meta=meta, user_id=principal.user_id, project_id=project_id
        )
        return envelope_response(result, key="deleted")
