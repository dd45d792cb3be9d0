"""Data-layer exports for the Tasks service."""

from services.productivity.tasks.data.repository import PostgresTaskRepository
from services.productivity.tasks.data.schema import tasks

__all__ = ["PostgresTaskRepository", "tasks"]
