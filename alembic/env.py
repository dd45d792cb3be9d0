"""Alembic environment configuration for the Cadence schema."""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from packages.cadence_shared.config import load_settings
from resources.substrates.postgres.metadata import metadata
from services.productivity.dependencies.data import schema as _dependencies  # noqa: F401
from services.productivity.energy.data import schema as _energy  # noqa: F401
from services.productivity.projects.data import schema as _projects  # noqa: F401
from services.productivity.tasks.data import schema as _tasks  # noqa: F401
from services.productivity.teams.data import schema as _teams  # noqa: F401
from services.productivity.users.data import schema as _users  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = metadata


def _get_url() -> str:
    """Resolve the database URL, preferring an explicitly configured one."""
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    return load_settings().postgres.url


def run_migrations_offline() -> None:
    """Run migrations in offline mode."""
    context.configure(
        url=_get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in online mode."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = _get_url()
    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
