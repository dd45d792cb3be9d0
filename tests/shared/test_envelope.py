"""Tests for envelope model, builders and request validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import pytest
from pydantic import BaseModel, Field, ValidationError

from packages.cadence_shared.envelope import (
    Envelope,
    EnvelopeKind,
    EnvelopeMeta,
    failure,
    new_meta,
    success,
    validate_meta,
)
from packages.cadence_shared.errors import ErrorCategory, ErrorDetail, codes
from packages.cadence_shared.unset import UNSET, assigned_values
from packages.cadence_shared.validation import validate_request


def _meta() -> EnvelopeMeta:
    """Return deterministic metadata for envelope tests."""
    return new_meta(
        kind=EnvelopeKind.RESULT,
        source="service_tasks",
        principal="auth0|tester",
        timestamp=datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC),
        envelope_id="env-1",
        trace_id="trace-1",
    )


def _error(code: str = "INVALID_ARGUMENT") -> ErrorDetail:
    return ErrorDetail(
        code=code,
        message="Invalid input",
        category=ErrorCategory.VALIDATION,
        retryable=False,
    )


class _Request(BaseModel):
    title: str = Field(min_length=1)
    priority: int = Field(default=3, ge=1, le=5)


def test_success_builder_returns_ok_envelope_with_payload() -> None:
    """success should build an ok envelope with payload and no errors."""
    envelope = success(meta=_meta(), payload={"task_id": "t-1"})

    assert envelope.ok is True
    assert envelope.has_payload is True
    assert envelope.value == {"task_id": "t-1"}
    assert envelope.errors == []


def test_failure_builder_returns_non_ok_envelope_without_payload() -> None:
    """failure should build a non-ok envelope containing provided errors."""
    envelope = failure(meta=_meta(), errors=[_error("DEPENDENCY_UNAVAILABLE")])

    assert envelope.ok is False
    assert envelope.value is None
    assert [item.code for item in envelope.errors] == ["DEPENDENCY_UNAVAILABLE"]


def test_envelope_model_validation_rejects_invalid_error_shape() -> None:
    """Envelope model validation should fail for malformed error entries."""
    with pytest.raises(ValidationError):
        Envelope[dict[str, str]].model_validate(
            {
                "metadata": _meta(),
                "payload": {"value": {"task_id": "t-1"}},
                "errors": [{"code": "BAD"}],
            }
        )


def test_new_meta_generates_ids_when_omitted() -> None:
    """Fresh metadata should carry envelope and trace identifiers."""
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="http", principal="auth0|tester")

    validate_meta(meta)
    assert meta.envelope_id != ""
    assert meta.trace_id != ""


def test_validate_meta_rejects_blank_principal() -> None:
    """Metadata without a principal is not valid."""
    meta = new_meta(kind=EnvelopeKind.COMMAND, source="http", principal="")

    with pytest.raises(ValueError):
        validate_meta(meta)


def test_validate_request_reports_first_field_error() -> None:
    """Only the first failing field should be reported, prefixed by its name."""
    request, errors = validate_request(
        meta=_meta(), model=_Request, payload={"title": "", "priority": 9}
    )

    assert request is None
    assert len(errors) == 1
    assert errors[0].message.startswith("title:")
    assert errors[0].code == codes.INVALID_ARGUMENT
    assert errors[0].metadata == {"field": "title"}


def test_validate_request_applies_defaults() -> None:
    """Missing optional fields should take model defaults."""
    request, errors = validate_request(meta=_meta(), model=_Request, payload={"title": "x"})

    assert errors == []
    assert request is not None
    assert request.priority == 3


def test_validate_request_rejects_invalid_metadata_before_payload() -> None:
    """Broken metadata should fail even when the payload is valid."""
    meta = new_meta(kind=EnvelopeKind.UNSPECIFIED, source="http", principal="auth0|tester")

    request, errors = validate_request(meta=meta, model=_Request, payload={"title": "x"})

    assert request is None
    assert errors[0].metadata == {"field": "metadata"}


@dataclass(frozen=True)
class _Update:
    name: str | None = UNSET
    description: str | None = UNSET


def test_assigned_values_keeps_explicit_none() -> None:
    """Explicit ``None`` is an assignment; omitted fields are not."""
    assert assigned_values(_Update(description=None)) == {"description": None}
    assert assigned_values(_Update()) == {}
