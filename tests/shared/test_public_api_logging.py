"""Tests for the public API instrumentation decorator and log formatting."""

from __future__ import annotations

import json
import logging

import pytest

from packages.cadence_shared.envelope import EnvelopeKind, failure, new_meta, success
from packages.cadence_shared.errors import not_found_error
from packages.cadence_shared.logging import (
    CompletionContext,
    InvocationContext,
    log_context,
    public_api_instrumented,
)
from packages.cadence_shared.logging.config import ContextFilter, JsonFormatter

_LOGGER = logging.getLogger("cadence.tests.public_api")


class _RecordingConcern:
    def __init__(self) -> None:
        self.invocations: list[InvocationContext] = []
        self.completions: list[CompletionContext] = []

    def on_invocation(self, context: InvocationContext) -> None:
        self.invocations.append(context)

    def on_completion(self, context: CompletionContext) -> None:
        self.completions.append(context)


class _ExplodingConcern:
    def on_invocation(self, context: InvocationContext) -> None:
        raise RuntimeError("concern broke")

    def on_completion(self, context: CompletionContext) -> None:
        raise RuntimeError("concern broke")


def _meta():
    return new_meta(
        kind=EnvelopeKind.QUERY, source="test", principal="auth0|tester", trace_id="trace-9"
    )


def test_decorator_records_references_and_success() -> None:
    """Selected id arguments and the envelope outcome should be captured."""
    concern = _RecordingConcern()

    @public_api_instrumented(
        component_id="service_tasks", id_fields=("user_id", "task_id"), concerns=[concern]
    )
    def get_task(*, meta, user_id: str, task_id: str | None = None):
        return success(meta=meta, payload={"id": task_id})

    get_task(meta=_meta(), user_id="u-1", task_id=None)

    invocation = concern.invocations[0]
    assert invocation.api_name == "get_task"
    assert invocation.trace_id == "trace-9"
    assert invocation.references == {"user_id": "u-1"}
    assert concern.completions[0].success is True


def test_decorator_summarizes_envelope_errors() -> None:
    """Failed envelopes should yield code-prefixed messages and categories."""
    concern = _RecordingConcern()

    @public_api_instrumented(component_id="service_tasks", concerns=[concern])
    def get_task(*, meta):
        return failure(meta=meta, errors=[not_found_error("Task not found")])

    get_task(meta=_meta())

    completion = concern.completions[0]
    assert completion.success is False
    assert completion.errors == ["NOT_FOUND: Task not found"]
    assert completion.error_categories == ["not_found"]


def test_decorator_records_and_reraises_exceptions() -> None:
    """Unexpected exceptions should be recorded as internal and propagate."""
    concern = _RecordingConcern()

    @public_api_instrumented(component_id="service_tasks", concerns=[concern])
    def explode(*, meta):
        raise KeyError("missing")

    with pytest.raises(KeyError):
        explode(meta=_meta())

    assert concern.completions[0].error_categories == ["internal"]


def test_failing_concern_does_not_break_the_call(caplog: pytest.LogCaptureFixture) -> None:
    """Instrumentation failures are logged, never raised into the service."""

    @public_api_instrumented(
        component_id="service_tasks", concerns=[_ExplodingConcern()], logger=_LOGGER
    )
    def ping(*, meta):
        return success(meta=meta, payload="pong")

    with caplog.at_level(logging.WARNING, logger=_LOGGER.name):
        result = ping(meta=_meta())

    assert result.value == "pong"
    assert "instrumentation concern failed" in caplog.text


def test_decorator_requires_a_concern() -> None:
    """A decorator without logger or concerns would be a silent no-op."""
    with pytest.raises(ValueError):
        public_api_instrumented(component_id="service_tasks")


def test_json_formatter_includes_bound_context() -> None:
    """Structured context should be merged into the JSON log line."""
    record = logging.LogRecord(
        name="cadence.tasks",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="task %s",
        args=("completed",),
        exc_info=None,
    )
    with log_context({"trace_id": "trace-9", "user_id": None}):
        ContextFilter().filter(record)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "task completed"
    assert payload["level"] == "INFO"
    assert payload["trace_id"] == "trace-9"
    assert "user_id" not in payload
