"""Energy-log retention maintenance."""

from __future__ import annotations

import sys

from packages.cadence_shared.config import CadenceSettings, load_settings
from packages.cadence_shared.envelope import Envelope, EnvelopeKind, new_meta
from packages.cadence_shared.logging import configure_logging, get_logger
from resources.substrates.postgres import PostgresRuntime
from services.productivity.energy import build_energy_service

_LOGGER = get_logger(__name__)


def run_retention(
    *, settings: CadenceSettings, days_to_keep: int | None = None
) -> Envelope[int]:
    """Delete energy logs older than the retention horizon for every user."""
    runtime = PostgresRuntime.from_settings(settings.postgres)
    try:
        energy = build_energy_service(sessions=runtime.sessions, settings=settings.energy)
        return energy.cleanup_old_logs(
            meta=new_meta(kind=EnvelopeKind.COMMAND, source="retention", principal="system"),
            days_to_keep=days_to_keep,
        )
    finally:
        runtime.dispose()


def main() -> None:
    """Run one retention pass with configured settings and exit non-zero on failure."""
    settings = load_settings()
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=f"{settings.logging.service}-retention",
        environment=settings.logging.environment,
    )
    result = run_retention(settings=settings)
    if not result.ok:
        _LOGGER.error("energy retention failed: %s", result.errors[0].message)
        sys.exit(1)
    _LOGGER.info("energy retention completed: deleted=%s", result.value)


if __name__ == "__main__":
    main()
