"""Instrumentation decorator for public service API methods.

Every public method of a service implementation is wrapped so one invocation
record and one completion record are emitted with the component id, method
name, correlation fields from ``meta``, selected id arguments, duration, and a
sanitized error summary taken from the returned envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from time import perf_counter
from typing import Any, Callable, Mapping, Protocol, Sequence

from . import fields
from .context import log_context


@dataclass(frozen=True)
class InvocationContext:
    """Structured metadata describing one public API invocation."""

    component_id: str
    api_name: str
    trace_id: str | None
    envelope_id: str | None
    principal: str | None
    references: Mapping[str, str]


@dataclass(frozen=True)
class CompletionContext:
    """Structured metadata describing one completed public API invocation."""

    invocation: InvocationContext
    success: bool
    duration_ms: float
    errors: list[str]
    error_categories: list[str]


class PublicApiInstrumentationConcern(Protocol):
    """Hook contract for one public API instrumentation concern."""

    def on_invocation(self, context: InvocationContext) -> None:
        """Handle invocation-start event for one method call."""

    def on_completion(self, context: CompletionContext) -> None:
        """Handle completion event for one method call."""


class PublicApiLoggingConcern:
    """Logging concern implementation for invocation/completion events."""

    def __init__(self, *, logger: Any) -> None:
        self._logger = logger

    def on_invocation(self, context: InvocationContext) -> None:
        """Emit standardized structured invocation-start log."""
        with log_context(_invocation_log_context(context)):
            self._logger.info("Public API invocation")

    def on_completion(self, context: CompletionContext) -> None:
        """Emit standardized structured completion log."""
        payload = _invocation_log_context(context.invocation)
        payload.update(
            {
                fields.EVENT: fields.PUBLIC_API_COMPLETION_EVENT,
                fields.SUCCESS: context.success,
                fields.DURATION_MS: context.duration_ms,
                fields.ERRORS: context.errors,
                fields.ERROR_CATEGORIES: context.error_categories,
            }
        )
        with log_context(payload):
            if context.success:
                self._logger.info("Public API completion")
            else:
                self._logger.warning("Public API completion")


def public_api_instrumented(
    *,
    component_id: str,
    api_name: str | None = None,
    id_fields: tuple[str, ...] = (),
    concerns: Sequence[PublicApiInstrumentationConcern] | None = None,
    logger: Any | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate one public API method with composable instrumentation concerns."""
    resolved_concerns: tuple[PublicApiInstrumentationConcern, ...] = tuple(
        concerns or ()
    )
    if logger is not None:
        resolved_concerns = (PublicApiLoggingConcern(logger=logger), *resolved_concerns)
    if len(resolved_concerns) == 0:
        raise ValueError("public_api_instrumented requires at least one concern")

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        method_name = api_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            meta = kwargs.get("meta")
            references = {
                name: str(kwargs[name])
                for name in id_fields
                if kwargs.get(name) not in (None, "")
            }
            invocation = InvocationContext(
                component_id=component_id,
                api_name=method_name,
                trace_id=_attr_or_none(meta, "trace_id"),
                envelope_id=_attr_or_none(meta, "envelope_id"),
                principal=_attr_or_none(meta, "principal"),
                references=references,
            )
            _emit(
                concerns=resolved_concerns,
                stage="invocation",
                invocation=invocation,
                context=invocation,
                logger=logger,
            )

            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                completion = CompletionContext(
                    invocation=invocation,
                    success=False,
                    duration_ms=round((perf_counter() - started) * 1000.0, 3),
                    errors=[f"{type(exc).__name__}: {exc}"],
                    error_categories=["internal"],
                )
                _emit(
                    concerns=resolved_concerns,
                    stage="completion",
                    invocation=invocation,
                    context=completion,
                    logger=logger,
                )
                raise

            success, errors = _result_summary(result)
            completion = CompletionContext(
                invocation=invocation,
                success=success,
                duration_ms=round((perf_counter() - started) * 1000.0, 3),
                errors=errors,
                error_categories=_result_error_categories(result),
            )
            _emit(
                concerns=resolved_concerns,
                stage="completion",
                invocation=invocation,
                context=completion,
                logger=logger,
            )
            return result

        return wrapper

    return decorator


def _attr_or_none(obj: object | None, name: str) -> str | None:
    """Return string attribute value from object when present."""
    if obj is None:
        return None
    value = getattr(obj, name, None)
    if value in (None, ""):
        return None
    return str(value)


def _result_summary(result: object) -> tuple[bool, list[str]]:
    """Infer success and sanitized error summaries from a result value."""
    errors = _sanitize_errors(getattr(result, "errors", []))
    ok_value = getattr(result, "ok", None)
    if isinstance(ok_value, bool):
        return ok_value, errors
    return len(errors) == 0, errors


def _result_error_categories(result: object) -> list[str]:
    """Infer normalized error categories from a result-like object."""
    errors_obj = getattr(result, "errors", [])
    if not isinstance(errors_obj, list):
        return []
    categories: list[str] = []
    for item in errors_obj:
        raw = getattr(item, "category", None)
        category = getattr(raw, "value", raw)
        if category in (None, ""):
            continue
        categories.append(str(category))
    return categories


def _sanitize_errors(errors: object) -> list[str]:
    """Return safe one-line error summaries for logs."""
    if not isinstance(errors, list):
        return []
    summaries: list[str] = []
    for item in errors:
        code = getattr(item, "code", None)
        message = getattr(item, "message", None)
        if message in (None, ""):
            continue
        if code in (None, ""):
            summaries.append(str(message))
        else:
            summaries.append(f"{code}: {message}")
    return summaries


def _invocation_log_context(context: InvocationContext) -> dict[str, object]:
    """Build common structured fields for one invocation event."""
    return {
        fields.EVENT: fields.PUBLIC_API_INVOCATION_EVENT,
        fields.COMPONENT_ID: context.component_id,
        fields.API_NAME: context.api_name,
        fields.TRACE_ID: context.trace_id,
        fields.ENVELOPE_ID: context.envelope_id,
        fields.PRINCIPAL: context.principal,
        **context.references,
    }


def _emit(
    *,
    concerns: Sequence[PublicApiInstrumentationConcern],
    stage: str,
    invocation: InvocationContext,
    context: InvocationContext | CompletionContext,
    logger: Any | None,
) -> None:
    """Dispatch one event to every concern with failure isolation."""
    for concern in concerns:
        try:
            if isinstance(context, CompletionContext):
                concern.on_completion(context)
            else:
                concern.on_invocation(context)
        except Exception as exc:  # noqa: BLE001
            if logger is None:
                continue
            with log_context(
                {
                    fields.EVENT: fields.PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT,
                    fields.COMPONENT_ID: invocation.component_id,
                    fields.API_NAME: invocation.api_name,
                    fields.STAGE: stage,
                    fields.CONCERN: type(concern).__name__,
                }
            ):
                logger.warning(
                    "Public API instrumentation concern failed: %s",
                    exc,
                    exc_info=exc,
                )
