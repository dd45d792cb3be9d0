"""Task Dependencies service native package exports."""

from services.productivity.dependencies.component import SERVICE_COMPONENT_ID
from services.productivity.dependencies.domain import (
    DependencyOverview,
    DependencyType,
    TaskDependencyRecord,
)
from services.productivity.dependencies.implementation import DefaultDependencyService
from services.productivity.dependencies.service import (
    DependencyService,
    build_dependency_service,
)

__all__ = [
    "DefaultDependencyService",
    "DependencyOverview",
    "DependencyService",
    "DependencyType",
    "SERVICE_COMPONENT_ID",
    "TaskDependencyRecord",
    "build_dependency_service",
]
