"""Mapping from service envelopes to HTTP responses."""

from __future__ import annotations

from typing import Any, Iterable

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from packages.cadence_shared.envelope import Envelope
from packages.cadence_shared.errors import ErrorCategory, ErrorDetail

STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.POLICY: 403,
    ErrorCategory.DEPENDENCY: 503,
    ErrorCategory.INTERNAL: 500,
    ErrorCategory.UNSPECIFIED: 500,
}


def status_for_errors(errors: Iterable[ErrorDetail]) -> int:
    """Return the HTTP status for the first error in ``errors``."""
    for error in errors:
        return STATUS_BY_CATEGORY.get(error.category, 500)
    return 500


def error_body(errors: list[ErrorDetail]) -> dict[str, Any]:
    """Render envelope errors as a JSON-compatible response body."""
    first = errors[0]
    return {
        "error": first.message,
        "code": first.code,
        "details": [
            {
                "code": item.code,
                "message": item.message,
                "category": item.category.value,
                "retryable": item.retryable,
            }
            for item in errors
        ],
    }


def envelope_response(
    envelope: Envelope[Any],
    *,
    status_code: int = 200,
    key: str | None = None,
) -> JSONResponse:
    """Render one envelope as JSON, mapping error categories to statuses.

    ``key`` wraps the payload value in a one-field object, e.g.
    ``{"tasks": [...]}``.
    """
    if not envelope.ok:
        return JSONResponse(
            status_code=status_for_errors(envelope.errors),
            content=error_body(envelope.errors),
        )
    value = jsonable_encoder(envelope.value)
    if key is not None:
        value = {key: value}
    return JSONResponse(status_code=status_code, content=value)
