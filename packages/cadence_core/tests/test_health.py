"""Tests for the process health route."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from packages.cadence_core import health
from packages.cadence_shared.clock import FixedClock

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)


def _client(ready: bool) -> TestClient:
    app = FastAPI()
    router = APIRouter()
    health.register_routes(
        router=router, database_ready=lambda: ready, clock=FixedClock(NOW), version="1.2.3"
    )
    app.include_router(router)
    return TestClient(app)


def test_health_reports_ok_when_database_answers() -> None:
    """A reachable database should yield 200 with clock-stamped metadata."""
    response = _client(True).get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "database": "up",
        "version": "1.2.3",
        "timestamp": NOW.isoformat(),
    }


def test_health_reports_degraded_when_database_is_down() -> None:
    """An unreachable database should yield 503 so balancers drain the node."""
    response = _client(False).get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "down"
