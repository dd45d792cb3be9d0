"""HTTP route tests for the Projects service."""

from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter
from fastapi.testclient import TestClient

from packages.cadence_shared.http import Principal, create_app
from services.productivity.projects.api import register_routes
from services.productivity.projects.implementation import DefaultProjectService
from services.productivity.projects.tests.test_project_service import (
    _FakeProjectRepository,
)

_PRINCIPAL = Principal(user_id=uuid4(), subject="auth0|tester", email="t@example.com")


def _client() -> TestClient:
    app = create_app(title="cadence-test")
    router = APIRouter()
    register_routes(
        router=router,
        service=DefaultProjectService(repository=_FakeProjectRepository()),
        current_principal=lambda: _PRINCIPAL,
    )
    app.include_router(router)
    return TestClient(app)


def test_create_then_archive_project() -> None:
    """Created projects should round through the archive route."""
    client = _client()

    created = client.post("/api/projects", json={"name": "Garden"})
    project_id = created.json()["project"]["id"]
    archived = client.post(f"/api/projects/{project_id}/archive")

    assert created.status_code == 201
    assert archived.status_code == 200
    assert archived.json()["project"]["status"] == "archived"


def test_validation_failure_maps_to_400() -> None:
    """Invalid bodies should produce a 400 with the field-prefixed message."""
    client = _client()

    response = client.post("/api/projects", json={"name": ""})

    assert response.status_code == 400
    assert response.json()["error"].startswith("name:")


def test_unknown_project_maps_to_404() -> None:
    """Unknown project ids should produce a 404."""
    client = _client()

    response = client.get(f"/api/projects/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "RESOURCE_NOT_FOUND"
