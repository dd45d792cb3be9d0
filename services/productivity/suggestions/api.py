"""HTTP routes for the Suggestions service."""

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
from services.productivity.suggestions.service import SuggestionService


def register_routes(
    *,
    router: APIRouter,
    service: SuggestionService,
    current_principal: PrincipalDependency,
) -> None:
    """Register suggestion routes."""

    @router.get("/api/suggestions")
    def read_suggestions(
        request: Request,
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject, kind=EnvelopeKind.QUERY)
        result = service.get_suggestions(meta=meta, user_id=principal.user_id)
        return envelope_response(result)

    @router.post("/api/suggestions/accept")
    def accept_suggestion(
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
        principal: Principal = Depends(current_principal),
    ) -> JSONResponse:
        meta = request_meta(request, principal=principal.subject)
        result = service.accept_suggestion(
            meta=meta, user_id=principal.user_id, data=payload
        )
        return envelope_response(result, key="task")
