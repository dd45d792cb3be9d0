"""Data-layer exports for the Task Dependencies service."""

from services.productivity.dependencies.data.repository import PostgresDependencyRepository
from services.productivity.dependencies.data.schema import task_dependencies

__all__ = ["PostgresDependencyRepository", "task_dependencies"]
