"""Data-layer exports for the Projects service."""

from services.productivity.projects.data.repository import PostgresProjectRepository
from services.productivity.projects.data.schema import projects

__all__ = ["PostgresProjectRepository", "projects"]
