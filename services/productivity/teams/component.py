"""Component identity for the Teams service."""

SERVICE_COMPONENT_ID = "service_teams"
