"""Cadence process runtime: service wiring, HTTP assembly, health and maintenance."""

from packages.cadence_core.app import create_api
from packages.cadence_core.auth import IdentitySyncError, build_current_principal
from packages.cadence_core.migrations import MigrationExecutionError, run_migrations
from packages.cadence_core.retention import run_retention
from packages.cadence_core.services import ServiceSet, build_services

__all__ = [
    "IdentitySyncError",
    "MigrationExecutionError",
    "ServiceSet",
    "build_current_principal",
    "build_services",
    "create_api",
    "run_migrations",
    "run_retention",
]
