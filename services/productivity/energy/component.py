"""Component identity for the Energy service."""

SERVICE_COMPONENT_ID = "service_energy"
