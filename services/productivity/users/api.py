"""HTTP routes for the Users service."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from packages.cadence_shared.envelope import EnvelopeKind
from packages.cadence_shared.http import (
    Principal,
    PrincipalDependency,
    envelope_response,
    request_meta,
)
from services.productivity.users.service import UserService


def register_routes(
    *,
    router: APIRouter,
    service: UserService,
    current_principal: PrincipalDependency,
) -> None:
    """Register account and notification-preference routes."""

    @router.get("/api/users/me")
    def read_current_user(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        return envelope_response(service.get_user(meta=meta, user_id=principal.user_id))

    @router.put("/api/users/me")
    def update_current_user(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        return envelope_response(
            service.update_user(meta=meta, user_id=principal.user_id, data=payload)
        )

    @router.delete("/api/users/me")
    def delete_current_user(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.delete_user(meta=meta, user_id=principal.user_id)
        return envelope_response(result, key="deleted")

    @router.get("/api/notifications/preferences")
    def read_notification_preferences(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        return envelope_response(
            service.get_notification_preferences(meta=meta, user_id=principal.user_id)
        )

    @router.post("/api/notifications/preferences")
    def update_notification_preferences(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        return envelope_response(
            service.update_notification_preferences(
                meta=meta, user_id=principal.user_id, data=payload
            )
        )
