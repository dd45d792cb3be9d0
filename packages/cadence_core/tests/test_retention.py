"""Tests for the energy-log retention entrypoint."""

from __future__ import annotations

from typing import Any

import pytest

from packages.cadence_core import retention
from packages.cadence_shared.config import CadenceSettings, EnergySettings
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, success


class _FakeRuntime:
    """Postgres runtime stand-in that records disposal."""

    def __init__(self) -> None:
        self.sessions = object()
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True


class _FakeEnergyService:
    """Energy service stand-in that records the cleanup call."""

    def __init__(self) -> None:
        self.calls: list[tuple[EnvelopeMeta, int | None]] = []
        self.raise_on_cleanup = False

    def cleanup_old_logs(
        self, *, meta: EnvelopeMeta, days_to_keep: int | None = None
    ) -> Envelope[int]:
        if self.raise_on_cleanup:
            raise RuntimeError("boom")
        self.calls.append((meta, days_to_keep))
        return success(meta=meta, payload=4)


def _patch(monkeypatch: pytest.MonkeyPatch) -> tuple[_FakeRuntime, _FakeEnergyService, dict]:
    runtime = _FakeRuntime()
    energy = _FakeEnergyService()
    built: dict[str, Any] = {}

    def _build(*, sessions: object, settings: EnergySettings) -> _FakeEnergyService:
        built["sessions"] = sessions
        built["settings"] = settings
        return energy

    monkeypatch.setattr(retention.PostgresRuntime, "from_settings", lambda settings: runtime)
    monkeypatch.setattr(retention, "build_energy_service", _build)
    return runtime, energy, built


def test_run_retention_cleans_up_with_system_principal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Retention should run one cleanup over the runtime's sessions and dispose it."""
    runtime, energy, built = _patch(monkeypatch)
    settings = CadenceSettings(energy=EnergySettings(retention_days=30))

    result = retention.run_retention(settings=settings, days_to_keep=14)

    assert result.value == 4
    assert built["sessions"] is runtime.sessions
    assert built["settings"].retention_days == 30
    assert energy.calls[0][0].principal == "system"
    assert energy.calls[0][1] == 14
    assert runtime.disposed is True


def test_run_retention_disposes_runtime_on_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Connection pools should be released even when cleanup raises."""
    runtime, energy, _ = _patch(monkeypatch)
    energy.raise_on_cleanup = True

    with pytest.raises(RuntimeError):
        retention.run_retention(settings=CadenceSettings())

    assert runtime.disposed is True
