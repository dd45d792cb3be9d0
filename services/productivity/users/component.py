"""Component identity for the Users service."""

SERVICE_COMPONENT_ID = "service_users"
