"""Component identity for the Task Dependencies service."""

SERVICE_COMPONENT_ID = "service_dependencies"
