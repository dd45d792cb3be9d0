"""Request validation shared by service implementations."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from packages.cadence_shared.envelope import EnvelopeMeta, validate_meta
from packages.cadence_shared.errors import ErrorDetail, codes, validation_error

TModel = TypeVar("TModel", bound=BaseModel)


def validate_request(
    *,
    meta: EnvelopeMeta,
    model: type[TModel],
    payload: Mapping[str, Any] | None,
) -> tuple[TModel | None, list[ErrorDetail]]:
    """Validate envelope metadata and one request payload.

    Only the first field failure is reported, as ``"<field>: <message>"``.
    """
    try:
        validate_meta(meta)
    except ValueError as exc:
        return None, [
            validation_error(str(exc), code=codes.INVALID_ARGUMENT, metadata={"field": "metadata"})
        ]

    try:
        return model.model_validate(dict(payload or {})), []
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "request"
        return None, [
            validation_error(
                f"{field}: {first['msg']}",
                code=codes.INVALID_ARGUMENT,
                metadata={"field": field},
            )
        ]
