"""Alembic upgrade orchestration for the single Cadence schema."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from alembic import command
from alembic.config import Config

from packages.cadence_shared.config import PostgresSettings

REPO_ROOT = Path(__file__).resolve().parents[2]


class MigrationExecutionError(RuntimeError):
    """Raised when an Alembic upgrade fails."""


def alembic_config(settings: PostgresSettings, *, repo_root: Path | None = None) -> Config:
    """Build an Alembic config bound to the configured database URL."""
    root = repo_root if repo_root is not None else REPO_ROOT
    config = Config(str(root / "alembic.ini"))
    config.set_main_option("script_location", str(root / "alembic"))
    config.set_main_option("sqlalchemy.url", settings.url.replace("%", "%%"))
    return config


def run_migrations(
    *,
    settings: PostgresSettings,
    revision: str = "head",
    repo_root: Path | None = None,
    upgrade_fn: Callable[[Config, str], None] = command.upgrade,
) -> str:
    """Upgrade the database to ``revision`` and return the revision requested."""
    config = alembic_config(settings, repo_root=repo_root)
    try:
        upgrade_fn(config, revision)
    except Exception as exc:
        raise MigrationExecutionError(f"migration to '{revision}' failed") from exc
    return revision
