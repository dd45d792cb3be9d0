"""HTTP routes for the Teams service."""

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
from services.productivity.teams.service import TeamService


def register_routes(
    *,
    router: APIRouter,
    service: TeamService,
    current_principal: PrincipalDependency,
) -> None:
    """Register team collaboration routes."""

    @router.post("/api/teams")
    def create_team(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.create_team(meta=meta, user_id=principal.user_id, data=payload)
        return envelope_response(result, status_code=201, key="team")

    @router.get("/api/teams/{team_id}")
    def read_team(
        request: Request,
        team_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_team(meta=meta, user_id=principal.user_id, team_id=team_id)
        return envelope_response(result, key="team")

    @router.get("/api/teams/{team_id}/members")
    def list_members(
        request: Request,
        team_id: UUID,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.list_members(meta=meta, user_id=principal.user_id, team_id=team_id)
        return envelope_response(result, key="members")

    @router.post("/api/teams/{team_id}/invite")
    def invite_member(
        request: Request,
        team_id: UUID,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.invite_member(
            meta=meta, user_id=principal.user_id, team_id=team_id, data=payload
        )
        return envelope_response(result, status_code=201, key="invitation")

    @router.get("/api/teams/{team_id}/analytics")
    def read_analytics(
        request: Request,
        team_id: UUID,
        period: str = "week",
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_team_analytics(
            meta=meta, user_id=principal.user_id, team_id=team_id, period=period
        )
        return envelope_response(result, key="analytics")
