"""HTTP route tests for the Energy service."""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

from fastapi import APIRouter
from fastapi.testclient import TestClient

from packages.cadence_shared.http import Principal, create_app
from services.productivity.energy.api import register_routes
from services.productivity.energy.tests.test_energy_service import (
    NOW,
    _FakeEnergyLogRepository,
    _service,
)

_PRINCIPAL = Principal(user_id=uuid4(), subject="auth0|tester", email="t@example.com")


def _client() -> tuple[TestClient, _FakeEnergyLogRepository]:
    service, repository, _ = _service()
    app = create_app(title="cadence-test")
    router = APIRouter()
    register_routes(router=router, service=service, current_principal=lambda: _PRINCIPAL)
    app.include_router(router)
    return TestClient(app), repository


def test_log_energy_returns_created_log() -> None:
    """Logging should answer 201 with the stored reading."""
    client, _ = _client()

    response = client.post("/api/energy", json={"energy_level": 4, "mood_tags": ["calm"]})

    assert response.status_code == 201
    assert response.json()["energy_log"]["energy_level"] == 4


def test_latest_energy_without_logs_is_404() -> None:
    """No readings means no latest reading."""
    client, _ = _client()

    response = client.get("/api/energy/latest")

    assert response.status_code == 404


def test_list_energy_logs_reports_paging() -> None:
    """Listings should echo paging parameters and the returned count."""
    client, repository = _client()
    for minutes in (1, 2, 3):
        repository.add(_PRINCIPAL.user_id, 3, NOW - timedelta(minutes=minutes))

    response = client.get("/api/energy", params={"limit": 2, "offset": 0})

    body = response.json()
    assert response.status_code == 200
    assert body["count"] == 2
    assert body["limit"] == 2
    assert body["offset"] == 0


def test_range_with_inverted_bounds_is_400() -> None:
    """A start after the end should be rejected."""
    client, _ = _client()

    response = client.get(
        "/api/energy/range",
        params={"start_date": "2026-03-05T00:00:00Z", "end_date": "2026-03-01T00:00:00Z"},
    )

    assert response.status_code == 400


def test_pattern_defaults_for_new_user() -> None:
    """A user without logs gets the neutral pattern."""
    client, _ = _client()

    response = client.get("/api/energy/pattern")

    assert response.json()["pattern"]["average_energy"] == 3.0
    assert response.json()["pattern"]["peak_hours"] == []
