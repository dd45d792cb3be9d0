"""HTTP routes for the Task Dependencies service."""

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
from services.productivity.dependencies.service import DependencyService


def register_routes(
    *,
    router: APIRouter,
    service: DependencyService,
    current_principal: PrincipalDependency,
) -> None:
    """Register task dependency routes."""

    @router.post("/api/tasks/{task_id}/dependencies")
    def add_dependency(
        request: Request,
        task_id: UUID,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.add_dependency(
            meta=meta, user_id=principal.user_id, task_id=task_id, data=payload
        )
        return envelope_response(result, status_code=201, key="dependency")

    @router.get("/api/tasks/{task_id}/dependencies")
    def read_dependencies(
        request: Request,
        task_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_dependencies(
            meta=meta, user_id=principal.user_id, task_id=task_id
        )
        return envelope_response(result)

    @router.delete("/api/tasks/{task_id}/dependencies/{dependency_id}")
    def remove_dependency(
        request: Request,
        task_id: UUID,
        dependency_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.remove_dependency(
            meta=meta,
            user_id=principal.user_id,
            task_id=task_id,
            dependency_id=dependency_id,
        )
        return envelope_response(result, key="deleted")
