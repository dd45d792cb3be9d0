"""FastAPI and uvicorn helpers shared by the Cadence HTTP surface."""

from __future__ import annotations

from typing import Awaitable, Callable
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from packages.cadence_shared.envelope import EnvelopeKind, EnvelopeMeta, new_meta
from packages.cadence_shared.logging import fields, get_logger, log_context

from .errors import AuthenticationError, HttpClientError, MissingHeaderError

_LOGGER = get_logger(__name__)
TRACE_HEADER = "X-Request-Id"


def create_app(*, title: str = "cadence", version: str = "0.0.0") -> FastAPI:
    """Create a FastAPI app with request correlation and error handlers."""
    app = FastAPI(title=title, version=version)

    @app.middleware("http")
    async def _bind_request_context(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid4().hex
        request.state.trace_id = trace_id
        with log_context(
            {
                fields.TRACE_ID: trace_id,
                fields.HTTP_METHOD: request.method,
                fields.HTTP_PATH: request.url.path,
            }
        ):
            response = await call_next(request)
            with log_context({fields.HTTP_STATUS: response.status_code}):
                _LOGGER.info("HTTP request handled")
        response.headers[TRACE_HEADER] = trace_id
        return response

    @app.exception_handler(AuthenticationError)
    async def _authentication_failed(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"error": exc.message, "code": "UNAUTHENTICATED"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(HttpClientError)
    async def _upstream_failed(_request: Request, exc: HttpClientError) -> JSONResponse:
        _LOGGER.warning("Upstream HTTP dependency failed: %s", exc.message)
        return JSONResponse(
            status_code=503,
            content={"error": "identity provider unavailable", "code": "DEPENDENCY_UNAVAILABLE"},
        )

    return app


def run_app(
    app: FastAPI,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    log_level: str = "info",
) -> None:
    """Run one FastAPI app through uvicorn."""
    uvicorn.run(app, host=host, port=port, log_level=log_level)


def get_header(
    request: Request,
    name: str,
    *,
    required: bool = True,
) -> str | None:
    """Fetch one stripped header value and optionally enforce presence."""
    value = request.headers.get(name)
    if value is not None:
        value = value.strip()
    if required and not value:
        raise MissingHeaderError(
            message=f"Missing required header: {name}",
            header_name=name,
        )
    return value


def request_meta(
    request: Request,
    *,
    principal: str,
    kind: EnvelopeKind = EnvelopeKind.COMMAND,
    source: str = "http",
) -> EnvelopeMeta:
    """Build envelope metadata correlated with the inbound request."""
    return new_meta(
        kind=kind,
        source=source,
        principal=principal,
        trace_id=getattr(request.state, "trace_id", None),
    )
