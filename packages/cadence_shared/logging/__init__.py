"""Public logging API for Cadence services.

This package wraps Python's ``logging`` module with stdout emission defaults
and structured context propagation.
"""

from .config import configure_logging, get_logger
from .context import bind_context, get_context, log_context
from .public_api import (
    CompletionContext,
    InvocationContext,
    PublicApiInstrumentationConcern,
    PublicApiLoggingConcern,
    public_api_instrumented,
)

__all__ = [
    "bind_context",
    "CompletionContext",
    "configure_logging",
    "get_context",
    "get_logger",
    "InvocationContext",
    "log_context",
    "PublicApiInstrumentationConcern",
    "PublicApiLoggingConcern",
    "public_api_instrumented",
]
