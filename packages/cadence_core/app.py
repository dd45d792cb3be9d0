"""HTTP application assembly for the Cadence API process."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from packages.cadence_core import health
from packages.cadence_core.auth import IdentitySyncError
from packages.cadence_core.services import ServiceSet
from packages.cadence_shared.clock import Clock
from packages.cadence_shared.config import HttpSettings
from packages.cadence_shared.http import PrincipalDependency, create_app
from services.productivity.dependencies import api as dependencies_api
from services.productivity.energy import api as energy_api
from services.productivity.projects import api as projects_api
from services.productivity.suggestions import api as suggestions_api
from services.productivity.tasks import api as tasks_api
from services.productivity.teams import api as teams_api
from services.productivity.users import api as users_api


def create_api(
    *,
    http: HttpSettings,
    services: ServiceSet,
    current_principal: PrincipalDependency,
    database_ready: Callable[[], bool],
    clock: Clock,
) -> FastAPI:
    """Create the FastAPI app and register every service's routes."""
    app = create_app(title=http.title, version=http.version)

    @app.exception_handler(IdentitySyncError)
    async def _identity_sync_failed(_request: Request, exc: IdentitySyncError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "code": "DEPENDENCY_UNAVAILABLE"},
        )

    router = APIRouter()
    health.register_routes(
        router=router, database_ready=database_ready, clock=clock, version=http.version
    )
    users_api.register_routes(
        router=router, service=services.users, current_principal=current_principal
    )
    projects_api.register_routes(
        router=router, service=services.projects, current_principal=current_principal
    )
    dependencies_api.register_routes(
        router=router, service=services.dependencies, current_principal=current_principal
    )
    tasks_api.register_routes(
        router=router, service=services.tasks, current_principal=current_principal
    )
    energy_api.register_routes(
        router=router, service=services.energy, current_principal=current_principal
    )
    teams_api.register_routes(
        router=router, service=services.teams, current_principal=current_principal
    )
    suggestions_api.register_routes(
        router=router, service=services.suggestions, current_principal=current_principal
    )
    app.include_router(router)
    return app
