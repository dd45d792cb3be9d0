"""Energy service native package exports."""

from services.productivity.energy.component import SERVICE_COMPONENT_ID
from services.productivity.energy.domain import EnergyInsightsReport, EnergyLogRecord
from services.productivity.energy.implementation import DefaultEnergyService
from services.productivity.energy.service import EnergyService, build_energy_service

__all__ = [
    "DefaultEnergyService",
    "EnergyInsightsReport",
    "EnergyLogRecord",
    "EnergyService",
    "SERVICE_COMPONENT_ID",
    "build_energy_service",
]
