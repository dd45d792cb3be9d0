"""Process health route for load balancers and operators."""

from collections.abc import Callable

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from packages.cadence_shared.clock import Clock


def register_routes(
    *,
    router: APIRouter,
    database_ready: Callable[[], bool],
    clock: Clock,
    version: str = "0.0.0",
) -> None:
    """Register the unauthenticated ``/health`` route."""

    @router.get("/health")
    def health() -> JSONResponse:
        ready = database_ready()
        return JSONResponse(
            status_code=200 if ready else 503,
            content={
                "status": "ok" if ready else "degraded",
                "database": "up" if ready else "down",
                "version": version,
                "timestamp": clock.now().isoformat(),
            },
        )
