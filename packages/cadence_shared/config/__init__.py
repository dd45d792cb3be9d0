"""Public API for shared Cadence configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    AuthSettings,
    CadenceSettings,
    EnergySettings,
    HttpSettings,
    LoggingSettings,
    PostgresSettings,
    TeamSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AuthSettings",
    "CadenceSettings",
    "EnergySettings",
    "HttpSettings",
    "LoggingSettings",
    "PostgresSettings",
    "TeamSettings",
    "load_settings",
]
