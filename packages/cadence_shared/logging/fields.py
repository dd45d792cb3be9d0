"""Canonical logging field names shared by all Cadence components."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Envelope/correlation fields.
TRACE_ID = "trace_id"
ENVELOPE_ID = "envelope_id"
PRINCIPAL = "principal"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT = "public_api_instrumentation_failure"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"
ERROR_CATEGORIES = "error_categories"
STAGE = "stage"
CONCERN = "concern"

# HTTP request fields.
HTTP_METHOD = "http_method"
HTTP_PATH = "http_path"
HTTP_STATUS = "http_status"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
