"""Behavior tests for the Suggestions service over in-memory task, energy and user stores."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from packages.cadence_shared.clock import FixedClock
from packages.cadence_shared.config import EnergySettings
from packages.cadence_shared.envelope import EnvelopeKind, EnvelopeMeta, new_meta
from packages.cadence_shared.errors import ErrorCategory
from services.productivity.energy.implementation import DefaultEnergyService
from services.productivity.energy.tests.test_energy_service import (
    _FakeEnergyLogRepository,
)
from services.productivity.suggestions.domain import EnergyTrend, SuggestionKind
from services.productivity.suggestions.implementation import DefaultSuggestionService
from services.productivity.tasks.implementation import DefaultTaskService
from services.productivity.tasks.tests.test_task_service import _FakeTaskRepository
from services.productivity.users.implementation import DefaultUserService
from services.productivity.users.tests.test_user_service import _FakeUserRepository

NOW = datetime(2026, 3, 10, 14, 15, tzinfo=UTC)


@dataclass
class _World:
    service: DefaultSuggestionService
    tasks: DefaultTaskService
    energy_logs: _FakeEnergyLogRepository
    user_id: UUID


def _meta() -> EnvelopeMeta:
    return new_meta(kind=EnvelopeKind.QUERY, source="test", principal="auth0|tester")


def _world(timezone: str = "UTC") -> _World:
    clock = FixedClock(NOW)
    users = _FakeUserRepository()
    user = users.create_user(
        email="a@example.com",
        name="A",
        avatar_url=None,
        timezone=timezone,
        auth_subject="auth0|tester",
    )
    energy_logs = _FakeEnergyLogRepository()
    energy_logs.timezones[user.id] = timezone
    tasks = DefaultTaskService(repository=_FakeTaskRepository(), clock=clock)
    service = DefaultSuggestionService(
        tasks=tasks,
        energy=DefaultEnergyService(
            repository=energy_logs, settings=EnergySettings(), clock=clock
        ),
        users=DefaultUserService(repository=users),
        default_timezone="UTC",
        clock=clock,
    )
    return _World(service=service, tasks=tasks, energy_logs=energy_logs, user_id=user.id)


def _task(world: _World, title: str, energy: int, priority: int, **extra: object) -> UUID:
    result = world.tasks.create_task(
        meta=_meta(),
        user_id=world.user_id,
        data={"title": title, "energy_requirement": energy, "priority": priority, **extra},
    )
    assert result.value is not None
    return result.value.id


def test_suggestions_follow_rule_order_and_drop_low_confidence() -> None:
    """Rules apply strongest first; ties keep the energy ranking; 0.50 is dropped."""
    world = _world()
    for days in range(1, 7):
        world.energy_logs.add(world.user_id, 4, NOW - timedelta(days=days))
    world.energy_logs.add(world.user_id, 2, NOW.replace(hour=13, minute=0))
    _task(world, "match", energy=2, priority=1)
    _task(world, "deadline", energy=5, priority=2, due_date=(NOW + timedelta(hours=3)).isoformat())
    _task(world, "urgent", energy=4, priority=5)
    _task(world, "usual", energy=4, priority=2)
    _task(world, "stretch", energy=5, priority=3)
    _task(world, "light", energy=1, priority=1)

    result = world.service.get_suggestions(meta=_meta(), user_id=world.user_id)

    assert result.value is not None
    report = result.value
    assert [item.task.title for item in report.suggestions] == [
        "match",
        "deadline",
        "urgent",
        "light",
        "usual",
    ]
    assert [item.kind for item in report.suggestions] == [
        SuggestionKind.PERFECT_MATCH,
        SuggestionKind.DUE_SOON,
        SuggestionKind.HIGH_PRIORITY,
        SuggestionKind.TYPICAL_HOUR,
        SuggestionKind.TYPICAL_HOUR,
    ]
    assert [item.confidence for item in report.suggestions] == [0.95, 0.85, 0.75, 0.70, 0.70]
    assert report.insights.current_energy == 2
    assert report.insights.expected_energy == 4
    assert report.insights.trend == EnergyTrend.BELOW
    assert [(peak.hour, peak.energy) for peak in report.insights.peak_hours] == [(14, 4)]
    assert report.patterns_count == 2


def test_suggestions_without_history_use_neutral_energy() -> None:
    """With no logs, current and expected energy are both the neutral level."""
    world = _world()
    _task(world, "steady", energy=3, priority=3)
    _task(world, "heavy", energy=5, priority=3)

    result = world.service.get_suggestions(meta=_meta(), user_id=world.user_id)

    assert result.value is not None
    assert result.value.insights.current_energy == 3
    assert result.value.insights.trend == EnergyTrend.NORMAL
    assert result.value.insights.peak_hours == []
    assert [item.task.title for item in result.value.suggestions] == ["steady", "heavy"]
    assert result.value.suggestions[1].kind == SuggestionKind.GENERAL


def test_readings_from_an_earlier_local_day_do_not_set_current_energy() -> None:
    """Only a reading from today in the user's zone counts as current energy."""
    world = _world("Asia/Tokyo")
    # 19:00 Tokyo on March 9th; NOW is 23:15 Tokyo on March 10th.
    world.energy_logs.add(world.user_id, 5, datetime(2026, 3, 9, 10, 0, tzinfo=UTC))

    result = world.service.get_suggestions(meta=_meta(), user_id=world.user_id)

    assert result.value is not None
    assert result.value.insights.current_energy == 3
    assert result.value.insights.expected_energy == 3


def test_suggestions_limit_to_five() -> None:
    world = _world()
    for index in range(8):
        _task(world, f"t{index}", energy=3, priority=3)

    result = world.service.get_suggestions(meta=_meta(), user_id=world.user_id)

    assert result.value is not None
    assert len(result.value.suggestions) == 5


def test_suggestions_for_unknown_user_are_not_found() -> None:
    world = _world()

    result = world.service.get_suggestions(meta=_meta(), user_id=uuid4())

    assert result.errors[0].category == ErrorCategory.NOT_FOUND


def test_accept_suggestion_schedules_when_time_given() -> None:
    """A schedule time becomes the task's due date."""
    world = _world()
    task_id = _task(world, "write", energy=3, priority=3)
    when = NOW + timedelta(days=1)

    scheduled = world.service.accept_suggestion(
        meta=_meta(),
        user_id=world.user_id,
        data={"task_id": str(task_id), "schedule_time": when.isoformat()},
    )
    plain = world.service.accept_suggestion(
        meta=_meta(), user_id=world.user_id, data={"task_id": str(task_id)}
    )

    assert scheduled.value is not None
    assert scheduled.value.due_date == when
    assert plain.value is not None
    assert plain.value.id == task_id


def test_accept_suggestion_rejects_unknown_task_and_bad_payload() -> None:
    world = _world()

    unknown = world.service.accept_suggestion(
        meta=_meta(), user_id=world.user_id, data={"task_id": str(uuid4())}
    )
    malformed = world.service.accept_suggestion(
        meta=_meta(), user_id=world.user_id, data={"task_id": "nope"}
    )

    assert unknown.errors[0].category == ErrorCategory.NOT_FOUND
    assert malformed.errors[0].category == ErrorCategory.VALIDATION
