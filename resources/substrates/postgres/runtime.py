"""Process-wide Postgres runtime handle shared by service repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from packages.cadence_shared.config import PostgresSettings
from resources.substrates.postgres.engine import create_postgres_engine
from resources.substrates.postgres.health import ping
from resources.substrates.postgres.session import (
    create_session_factory,
    transactional_session,
)


class SessionProvider:
    """Hand out one transactional session per repository operation."""

    def __init__(self, *, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that commits on exit and rolls back on error."""
        with transactional_session(self._session_factory) as db:
            yield db


@dataclass(frozen=True)
class PostgresRuntime:
    """Engine, session factory, and session provider built from settings."""

    engine: Engine
    session_factory: sessionmaker[Session]
    sessions: SessionProvider

    @classmethod
    def from_settings(cls, settings: PostgresSettings) -> "PostgresRuntime":
        engine = create_postgres_engine(settings)
        session_factory = create_session_factory(engine)
        return cls(
            engine=engine,
            session_factory=session_factory,
            sessions=SessionProvider(session_factory=session_factory),
        )

    def is_healthy(self) -> bool:
        """Return ``True`` when the database answers a ping."""
        return ping(self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
