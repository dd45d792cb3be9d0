"""Tasks service native package exports."""

from services.productivity.tasks.component import SERVICE_COMPONENT_ID
from services.productivity.tasks.domain import (
    ProjectSummary,
    TaskCompletion,
    TaskRecord,
    TaskStats,
    TaskStatus,
    TaskView,
    TaskWithEnergyMatch,
)
from services.productivity.tasks.implementation import DefaultTaskService
from services.productivity.tasks.service import TaskService, build_task_service

__all__ = [
    "DefaultTaskService",
    "ProjectSummary",
    "SERVICE_COMPONENT_ID",
    "TaskCompletion",
    "TaskRecord",
    "TaskService",
    "TaskStats",
    "TaskStatus",
    "TaskView",
    "TaskWithEnergyMatch",
    "build_task_service",
]
