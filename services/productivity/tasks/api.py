"""HTTP routes for the Tasks service."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from packages.cadence_shared.envelope import EnvelopeKind, failure
from packages.cadence_shared.errors import codes, validation_error
from packages.cadence_shared.http import (
    Principal,
    PrincipalDependency,
    envelope_response,
    request_meta,
)
from services.productivity.tasks.service import TaskService


def register_routes(
    *,
    router: APIRouter,
    service: TaskService,
    current_principal: PrincipalDependency,
) -> None:
    """Register task CRUD, stats, and completion routes."""

    @router.post("/api/tasks")
    def create_task(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.create_task(meta=meta, user_id=principal.user_id, data=payload)
        return envelope_response(result, status_code=201, key="task")

    @router.get("/api/tasks")
    def list_tasks(
        request: Request,
        energy_level: int | None = None,
        status: str | None = None,
        project_id: str | None = None,
        priority: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        """List tasks, or rank pending tasks when ``energy_level`` is given.

        The ranked view covers every pending task, so it takes no ``status``,
        ``limit`` or ``offset``.
        """
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        if energy_level is not None:
            unsupported = [
                name
                for name, value in (("status", status), ("limit", limit), ("offset", offset))
                if value is not None
            ]
            if unsupported:
                return envelope_response(
                    failure(
                        meta=meta,
                        errors=[
                            validation_error(
                                f"{unsupported[0]}: cannot be combined with energy_level",
                                code=codes.INVALID_ARGUMENT,
                                metadata={"field": unsupported[0]},
                            )
                        ],
                    )
                )
            result = service.list_tasks_with_energy_match(
                meta=meta,
                user_id=principal.user_id,
                current_energy_level=energy_level,
                project_id=project_id,
                priority=priority,
            )
        else:
            result = service.list_tasks(
                meta=meta,
                user_id=principal.user_id,
                status=status,
                project_id=project_id,
                priority=priority,
                limit=100 if limit is None else limit,
                offset=0 if offset is None else offset,
            )
        if not result.ok:
            return envelope_response(result)
        rows = result.value or []
        return JSONResponse(
            content=jsonable_encoder(
                {
                    "tasks": rows,
                    "count": len(rows),
                    "energy_matched": energy_level is not None,
                }
            )
        )

    @router.get("/api/tasks/stats")
    def read_task_stats(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_task_stats(meta=meta, user_id=principal.user_id)
        return envelope_response(result, key="stats")

    @router.get("/api/tasks/{task_id}")
    def read_task(
        request: Request,
        task_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_task(meta=meta, user_id=principal.user_id, task_id=task_id)
        return envelope_response(result, key="task")

    @router.put("/api/tasks/{task_id}")
    def update_task(
        request: Request,
        task_id: UUID,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.update_task(
            meta=meta, user_id=principal.user_id, task_id=task_id, data=payload
        )
        return envelope_response(result, key="task")

    @router.post("/api/tasks/{task_id}/complete")
    def complete_task(
        request: Request,
        task_id: UUID,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.complete_task(
            meta=meta, user_id=principal.user_id, task_id=task_id, data=payload
        )
        return envelope_response(result)

    @router.delete("/api/tasks/{task_id}")
    def delete_task(
        request: Request,
        task_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.delete_task(meta=meta, user_id=principal.user_id, task_id=task_id)
        return envelope_response(result, key="deleted")
