"""Injectable time source.

Services never call ``datetime.now`` directly; they receive a ``Clock`` so
time-dependent behavior (completion stamps, pattern windows, insight hours,
retention cutoffs) is deterministic under test.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Clock(Protocol):
    """Source of the current timezone-aware UTC instant."""

    def now(self) -> datetime:
        """Return the current instant in UTC."""


class SystemClock:
    """Wall-clock implementation backed by the host clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Manually advanced clock for tests and replays."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._instant = instant.astimezone(UTC)

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by ``delta``."""
        self._instant = self._instant + delta


def local_zone(name: str | None, default: str = "UTC") -> ZoneInfo:
    """Resolve an IANA zone name, falling back to ``default`` when unknown."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo(default)
