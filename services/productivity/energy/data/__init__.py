"""Data-layer exports for the Energy service."""

from services.productivity.energy.data.repository import PostgresEnergyLogRepository
from services.productivity.energy.data.schema import energy_logs

__all__ = ["PostgresEnergyLogRepository", "energy_logs"]
