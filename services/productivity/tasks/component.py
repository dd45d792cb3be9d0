"""Component identity for the Tasks service."""

SERVICE_COMPONENT_ID = "service_tasks"
