"""HTTP routes for the Energy service."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from packages.cadence_shared.envelope import EnvelopeKind
from packages.cadence_shared.http import (
    Principal,
    PrincipalDependency,
    envelope_response,
    request_meta,
)
from services.productivity.energy.service import EnergyService


def register_routes(
    *,
    router: APIRouter,
    service: EnergyService,
    current_principal: PrincipalDependency,
) -> None:
    """Register energy logging, pattern, and insight routes."""

    @router.post("/api/energy")
    def log_energy(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.log_energy(meta=meta, user_id=principal.user_id, data=payload)
        return envelope_response(result, status_code=201, key="energy_log")

    @router.get("/api/energy")
    def list_energy_logs(
        request: Request,
        limit: int = 100,
        offset: int = 0,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.list_energy_logs(
            meta=meta, user_id=principal.user_id, limit=limit, offset=offset
        )
        if not result.ok:
            return envelope_response(result)
        rows = result.value or []
        return JSONResponse(
            content=jsonable_encoder(
                {"energy_logs": rows, "count": len(rows), "limit": limit, "offset": offset}
            )
        )

    @router.get("/api/energy/latest")
    def read_latest_energy(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_latest_energy(meta=meta, user_id=principal.user_id)
        return envelope_response(result, key="energy_log")

    @router.get("/api/energy/range")
    def read_energy_range(
        request: Request,
        start_date: str,
        end_date: str,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_energy_by_range(
            meta=meta,
            user_id=principal.user_id,
            start_date=start_date,
            end_date=end_date,
        )
        if not result.ok:
            return envelope_response(result)
        rows = result.value or []
        return JSONResponse(
            content=jsonable_encoder(
                {
                    "energy_logs": rows,
                    "count": len(rows),
                    "date_range": {"start_date": start_date, "end_date": end_date},
                }
            )
        )

    @router.get("/api/energy/pattern")
    def read_energy_pattern(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_energy_pattern(meta=meta, user_id=principal.user_id)
        return envelope_response(result, key="pattern")

    @router.get("/api/energy/insights")
    def read_energy_insights(
        request: Request, principal: Principal = Depends(current_principal)
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        return envelope_response(
            service.get_energy_insights(meta=meta, user_id=principal.user_id)
        )
