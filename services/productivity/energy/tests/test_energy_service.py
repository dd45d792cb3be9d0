"""Behavior tests for the Energy service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from packages.cadence_shared.clock import FixedClock
from packages.cadence_shared.config import EnergySettings
from packages.cadence_shared.envelope import EnvelopeKind, EnvelopeMeta, new_meta
from packages.cadence_shared.errors import ErrorCategory
from services.productivity.energy.domain import EnergyLogRecord
from services.productivity.energy.implementation import DefaultEnergyService
from services.productivity.scoring import InsightType

NOW = datetime(2026, 3, 10, 14, 15, tzinfo=UTC)


class _FakeEnergyLogRepository:
    """In-memory energy log repository fake."""

    def __init__(self) -> None:
        self.rows: list[EnergyLogRecord] = []
        self.timezones: dict[UUID, str] = {}
        self.cutoff: datetime | None = None

    def add(self, user_id: UUID, level: int, logged_at: datetime) -> EnergyLogRecord:
        return self.create_log(
            user_id=user_id, energy_level=level, mood_tags=None, notes=None, logged_at=logged_at
        )

    def create_log(
        self,
        *,
        user_id: UUID,
        energy_level: int,
        mood_tags: list[str] | None,
        notes: str | None,
        logged_at: datetime,
    ) -> EnergyLogRecord:
        row = EnergyLogRecord(
            id=uuid4(),
            user_id=user_id,
            energy_level=energy_level,
            mood_tags=mood_tags,
            notes=notes,
            logged_at=logged_at,
        )
        self.rows.append(row)
        return row

    def list_logs(self, *, user_id: UUID, limit: int, offset: int) -> list[EnergyLogRecord]:
        owned = sorted(
            (row for row in self.rows if row.user_id == user_id),
            key=lambda row: row.logged_at,
            reverse=True,
        )
        return owned[offset : offset + limit]

    def latest_log(self, *, user_id: UUID) -> EnergyLogRecord | None:
        rows = self.list_logs(user_id=user_id, limit=1, offset=0)
        return rows[0] if rows else None

    def logs_between(
        self, *, user_id: UUID, start: datetime, end: datetime
    ) -> list[EnergyLogRecord]:
        return sorted(
            (
                row
                for row in self.rows
                if row.user_id == user_id and start <= row.logged_at <= end
            ),
            key=lambda row: row.logged_at,
        )

    def logs_since(self, *, user_id: UUID, since: datetime) -> list[EnergyLogRecord]:
        return [row for row in self.rows if row.user_id == user_id and row.logged_at > since]

    def user_timezone(self, *, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def delete_logs_before(self, *, cutoff: datetime) -> int:
        self.cutoff = cutoff
        kept = [row for row in self.rows if row.logged_at >= cutoff]
        deleted = len(self.rows) - len(kept)
        self.rows = kept
        return deleted


def _meta() -> EnvelopeMeta:
    return new_meta(kind=EnvelopeKind.QUERY, source="test", principal="auth0|tester")


def _service() -> tuple[DefaultEnergyService, _FakeEnergyLogRepository, FixedClock]:
    repository = _FakeEnergyLogRepository()
    clock = FixedClock(NOW)
    service = DefaultEnergyService(repository=repository, settings=EnergySettings(), clock=clock)
    return service, repository, clock


def test_log_energy_stamps_clock_time() -> None:
    """Readings should be stamped with the injected clock."""
    service, _, _ = _service()

    result = service.log_energy(
        meta=_meta(),
        user_id=uuid4(),
        data={"energy_level": 4, "mood_tags": ["focused"], "notes": "after coffee"},
    )

    assert result.value is not None
    assert result.value.logged_at == NOW
    assert result.value.mood_tags == ["focused"]


def test_log_energy_rejects_out_of_range_level_and_long_notes() -> None:
    """Levels must be 1-5 and notes at most 500 characters."""
    service, repository, _ = _service()

    level = service.log_energy(meta=_meta(), user_id=uuid4(), data={"energy_level": 0})
    notes = service.log_energy(
        meta=_meta(), user_id=uuid4(), data={"energy_level": 3, "notes": "x" * 501}
    )

    assert level.errors[0].message.startswith("energy_level:")
    assert notes.errors[0].message.startswith("notes:")
    assert repository.rows == []


def test_latest_energy_is_not_found_without_logs() -> None:
    """A user without readings has no latest reading."""
    service, _, _ = _service()

    result = service.get_latest_energy(meta=_meta(), user_id=uuid4())

    assert result.errors[0].category == ErrorCategory.NOT_FOUND


def test_range_rejects_inverted_bounds() -> None:
    """The start of a range must not be after its end."""
    service, _, _ = _service()

    result = service.get_energy_by_range(
        meta=_meta(),
        user_id=uuid4(),
        start_date="2026-03-05T00:00:00Z",
        end_date="2026-03-01T00:00:00Z",
    )

    assert result.errors[0].category == ErrorCategory.VALIDATION


def test_range_is_inclusive_and_ascending() -> None:
    """Readings on either bound should be included, oldest first."""
    service, repository, _ = _service()
    user_id = uuid4()
    start = datetime(2026, 3, 1, tzinfo=UTC)
    end = datetime(2026, 3, 2, tzinfo=UTC)
    repository.add(user_id, 2, end)
    repository.add(user_id, 3, start)
    repository.add(user_id, 4, end + timedelta(seconds=1))

    result = service.get_energy_by_range(
        meta=_meta(), user_id=user_id, start_date=start, end_date=end
    )

    assert result.value is not None
    assert [row.energy_level for row in result.value] == [3, 2]


def test_range_reads_naive_bounds_as_utc() -> None:
    """A naive bound alongside an aware one should compare as UTC, not fail."""
    service, repository, _ = _service()
    user_id = uuid4()
    repository.add(user_id, 4, datetime(2026, 3, 1, 12, tzinfo=UTC))

    result = service.get_energy_by_range(
        meta=_meta(),
        user_id=user_id,
        start_date="2026-03-01T00:00:00",
        end_date="2026-03-02T00:00:00Z",
    )
    inverted = service.get_energy_by_range(
        meta=_meta(),
        user_id=user_id,
        start_date="2026-03-03T00:00:00",
        end_date="2026-03-02T00:00:00Z",
    )

    assert result.value is not None
    assert [row.energy_level for row in result.value] == [4]
    assert inverted.errors[0].category == ErrorCategory.VALIDATION


def test_pattern_defaults_without_recent_logs() -> None:
    """Logs older than the window should be ignored."""
    service, repository, _ = _service()
    user_id = uuid4()
    repository.add(user_id, 5, NOW - timedelta(days=31))

    result = service.get_energy_pattern(meta=_meta(), user_id=user_id)

    assert result.value is not None
    assert result.value.average_energy == 3.0
    assert result.value.total_logs == 0
    assert result.value.peak_hours == []


def test_pattern_buckets_hours_in_user_timezone() -> None:
    """Hours should be grouped in the user's local time."""
    service, repository, _ = _service()
    user_id = uuid4()
    repository.timezones[user_id] = "Asia/Tokyo"
    for day in range(1, 4):
        repository.add(user_id, 5, NOW - timedelta(days=day, hours=1))

    result = service.get_energy_pattern(meta=_meta(), user_id=user_id)

    assert result.value is not None
    assert result.value.peak_hours == [22]
    assert result.value.total_logs == 3


def test_insights_flag_mismatch_during_local_peak_hour() -> None:
    """A low reading during a usual peak hour should yield a mismatch insight."""
    service, repository, _ = _service()
    user_id = uuid4()
    repository.timezones[user_id] = "Europe/Berlin"
    for day in range(1, 4):
        repository.add(user_id, 5, NOW - timedelta(days=day))
    repository.add(user_id, 2, NOW - timedelta(minutes=5))

    result = service.get_energy_insights(meta=_meta(), user_id=user_id)

    assert result.value is not None
    assert result.value.pattern.peak_hours == [15]
    assert result.value.latest is not None
    assert result.value.latest.energy_level == 2
    assert [insight.type for insight in result.value.insights] == [
        InsightType.PEAK_HOURS,
        InsightType.ENERGY_MISMATCH,
    ]


def test_cleanup_defaults_to_configured_retention() -> None:
    """Cleanup should delete logs older than the retention horizon."""
    service, repository, _ = _service()
    user_id = uuid4()
    repository.add(user_id, 3, NOW - timedelta(days=91))
    repository.add(user_id, 3, NOW - timedelta(days=89))

    result = service.cleanup_old_logs(meta=_meta())

    assert result.value == 1
    assert repository.cutoff == NOW - timedelta(days=90)
    assert len(repository.rows) == 1


def test_cleanup_rejects_non_positive_horizon() -> None:
    """A zero-day horizon would delete everything and is rejected."""
    service, _, _ = _service()

    result = service.cleanup_old_logs(meta=_meta(), days_to_keep=0)

    assert result.errors[0].category == ErrorCategory.VALIDATION
