"""Postgres/SQLAlchemy exception normalization helpers."""

from __future__ import annotations

from typing import Any

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure
from packages.cadence_shared.errors import (
    ErrorDetail,
    codes,
    conflict_error,
    dependency_error,
    internal_error,
    validation_error,
)


def normalize_postgres_error(exc: Exception) -> ErrorDetail:
    """Map low-level DB exceptions into shared structured error semantics.

    SQLAlchemy wraps driver exceptions, so both the wrapper type name and the
    driver message are inspected.
    """
    exc_type_name = type(exc).__name__
    message = str(exc)
    metadata = {"exception_type": exc_type_name}

    if "UniqueViolation" in exc_type_name or "duplicate key value" in message:
        return conflict_error(
            "resource already exists",
            code=codes.ALREADY_EXISTS,
            metadata=metadata,
        )

    if "ForeignKeyViolation" in exc_type_name or "violates foreign key" in message:
        return validation_error(
            "referenced resource does not exist",
            code=codes.INVALID_ARGUMENT,
            metadata=metadata,
        )

    if "CheckViolation" in exc_type_name or "violates check constraint" in message:
        return validation_error(
            "value outside allowed range",
            code=codes.INVALID_ARGUMENT,
            metadata=metadata,
        )

    if "OperationalError" in exc_type_name or "timeout" in message.lower():
        return dependency_error(
            "postgres unavailable",
            code=codes.DEPENDENCY_UNAVAILABLE,
            retryable=True,
            metadata=metadata,
        )

    if "InterfaceError" in exc_type_name or "ProgrammingError" in exc_type_name:
        return dependency_error(
            "postgres request failed",
            code=codes.DEPENDENCY_FAILURE,
            retryable=False,
            metadata=metadata,
        )

    return internal_error(
        "unexpected postgres failure",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )


def is_postgres_error(exc: Exception) -> bool:
    """Return whether one exception originates from the SQLAlchemy/psycopg stack."""
    module = type(exc).__module__
    return module.startswith("sqlalchemy") or module.startswith("psycopg")


def storage_failure(
    *,
    meta: EnvelopeMeta,
    operation: str,
    exc: Exception,
    logger: Any,
) -> Envelope[Any]:
    """Map one repository exception into a failed envelope."""
    if is_postgres_error(exc):
        error = normalize_postgres_error(exc)
    else:
        error = dependency_error(
            f"{operation} failed",
            code=codes.DEPENDENCY_FAILURE,
            metadata={"exception_type": type(exc).__name__},
        )
    logger.warning(
        "%s failed due to storage error: exception_type=%s",
        operation,
        type(exc).__name__,
        exc_info=exc,
    )
    return failure(meta=meta, errors=[error])
