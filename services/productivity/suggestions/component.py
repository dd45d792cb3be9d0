"""Component identity for the Suggestions service."""

SERVICE_COMPONENT_ID = "service_suggestions"
