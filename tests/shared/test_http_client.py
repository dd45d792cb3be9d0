"""Unit tests for the shared HTTP client wrapper."""

from __future__ import annotations

import httpx
import pytest

from packages.cadence_shared.http import (
    HttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)


def _client(handler) -> HttpClient:
    return HttpClient(base_url="https://idp.test", transport=httpx.MockTransport(handler))


def test_http_client_get_json_returns_decoded_payload() -> None:
    """get_json should decode and return JSON content."""
    with _client(lambda request: httpx.Response(200, json={"sub": "auth0|1"})) as client:
        assert client.get_json("/userinfo") == {"sub": "auth0|1"}


def test_http_client_maps_status_failure_to_typed_error() -> None:
    """Non-2xx responses should raise HttpStatusError with retry hints."""
    with _client(lambda request: httpx.Response(503, text="unavailable")) as client:
        with pytest.raises(HttpStatusError) as exc_info:
            client.get_json("/userinfo")

    error = exc_info.value
    assert error.method == "GET"
    assert error.status_code == 503
    assert error.retryable is True
    assert error.response_body == "unavailable"


def test_http_client_can_skip_status_raising() -> None:
    """Callers may inspect error responses themselves."""
    with _client(lambda request: httpx.Response(404)) as client:
        response = client.request("GET", "/missing", raise_for_status=False)

    assert response.status_code == 404


def test_http_client_maps_transport_failure_to_typed_error() -> None:
    """Transport failures should raise HttpRequestError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection failed", request=request)

    with _client(handler) as client:
        with pytest.raises(HttpRequestError) as exc_info:
            client.get_json("/userinfo")

    error = exc_info.value
    assert error.url == "https://idp.test/userinfo"
    assert error.retryable is True
    assert isinstance(error.cause, httpx.ConnectError)


def test_http_client_maps_json_decode_failure_to_typed_error() -> None:
    """Invalid JSON payloads should raise HttpJsonDecodeError."""
    with _client(lambda request: httpx.Response(200, text="not-json")) as client:
        with pytest.raises(HttpJsonDecodeError) as exc_info:
            client.get_json("/userinfo")

    assert exc_info.value.status_code == 200
    assert exc_info.value.response_body == "not-json"
