"""Component identity for the Projects service."""

SERVICE_COMPONENT_ID = "service_projects"
