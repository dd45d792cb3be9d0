"""Projects service native package exports."""

from services.productivity.projects.component import SERVICE_COMPONENT_ID
from services.productivity.projects.domain import (
    ProjectRecord,
    ProjectStatus,
    ProjectWithStats,
)
from services.productivity.projects.implementation import DefaultProjectService
from services.productivity.projects.service import ProjectService, build_project_service

__all__ = [
    "DefaultProjectService",
    "ProjectRecord",
    "ProjectService",
    "ProjectStatus",
    "ProjectWithStats",
    "SERVICE_COMPONENT_ID",
    "build_project_service",
]
