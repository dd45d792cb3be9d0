"""Data-layer exports for the Users service."""

from services.productivity.users.data.repository import PostgresUserRepository
from services.productivity.users.data.schema import users

__all__ = ["PostgresUserRepository", "users"]
