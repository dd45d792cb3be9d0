"""Postgres substrate primitives shared by Cadence services."""

from resources.substrates.postgres.engine import create_postgres_engine
from resources.substrates.postgres.errors import (
    is_postgres_error,
    normalize_postgres_error,
    storage_failure,
)
from resources.substrates.postgres.health import ping
from resources.substrates.postgres.metadata import metadata
from resources.substrates.postgres.runtime import PostgresRuntime, SessionProvider
from resources.substrates.postgres.session import (
    create_session_factory,
    transactional_session,
)

__all__ = [
    "PostgresRuntime",
    "SessionProvider",
    "create_postgres_engine",
    "create_session_factory",
    "is_postgres_error",
    "metadata",
    "normalize_postgres_error",
    "ping",
    "storage_failure",
    "transactional_session",
]
