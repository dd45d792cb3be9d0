"""Behavior tests for the Tasks service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from packages.cadence_shared.clock import FixedClock
from packages.cadence_shared.envelope import EnvelopeKind, EnvelopeMeta, new_meta
from packages.cadence_shared.errors import ErrorCategory
from packages.cadence_shared.unset import assigned_values
from services.productivity.tasks.domain import (
    TaskRecord,
    TaskStats,
    TaskStatus,
    TaskView,
)
from services.productivity.tasks.implementation import DefaultTaskService
from services.productivity.tasks.interfaces import NewTask, TaskFilters, TaskUpdate

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=UTC)


class _FakeTaskRepository:
    """In-memory, owner-scoped task repository fake."""

    def __init__(self) -> None:
        self.rows: dict[UUID, TaskRecord] = {}
        self.projects: set[tuple[UUID, UUID]] = set()
        self.updates: list[TaskUpdate] = []
        self.stats_week_start: datetime | None = None
        self.raise_on_read: Exception | None = None

    def create_task(self, *, user_id: UUID, task: NewTask) -> TaskRecord:
        row = TaskRecord(
            id=uuid4(),
            user_id=user_id,
            project_id=task.project_id,
            title=task.title,
            description=task.description,
            energy_requirement=task.energy_requirement,
            priority=task.priority,
            status=TaskStatus.PENDING,
            due_date=task.due_date,
            completed_at=None,
            estimated_duration=task.estimated_duration,
            actual_duration=None,
            points=task.points,
            tags=task.tags,
            subtasks=task.subtasks,
            notes=task.notes,
            recurrence=task.recurrence,
            created_at=NOW,
            updated_at=NOW,
        )
        self.rows[row.id] = row
        return row

    def get_task(self, *, user_id: UUID, task_id: UUID) -> TaskRecord | None:
        if self.raise_on_read is not None:
            raise self.raise_on_read
        row = self.rows.get(task_id)
        return row if row is not None and row.user_id == user_id else None

    def list_tasks(
        self, *, user_id: UUID, filters: TaskFilters, limit: int, offset: int
    ) -> list[TaskView]:
        rows = [
            TaskView(**row.model_dump())
            for row in self.rows.values()
            if row.user_id == user_id
            and (filters.status is None or row.status == filters.status)
            and (filters.priority is None or row.priority == filters.priority)
        ]
        return rows[offset : offset + limit]

    def list_pending_by_energy_match(
        self, *, user_id: UUID, current_energy_level: int, filters: TaskFilters
    ) -> list[TaskView]:
        return self.list_tasks(
            user_id=user_id,
            filters=TaskFilters(status=TaskStatus.PENDING, priority=filters.priority),
            limit=500,
            offset=0,
        )

    def project_exists(self, *, user_id: UUID, project_id: UUID) -> bool:
        return (user_id, project_id) in self.projects

    def update_task(
        self, *, user_id: UUID, task_id: UUID, update: TaskUpdate
    ) -> TaskRecord | None:
        self.updates.append(update)
        row = self.get_task(user_id=user_id, task_id=task_id)
        if row is None:
            return None
        row = row.model_copy(update=assigned_values(update))
        self.rows[task_id] = row
        return row

    def complete_task(
        self,
        *,
        user_id: UUID,
        task_id: UUID,
        completed_at: datetime,
        actual_duration: int | None,
    ) -> TaskRecord | None:
        row = self.get_task(user_id=user_id, task_id=task_id)
        if row is None or row.status != TaskStatus.PENDING:
            return None
        changes: dict[str, object] = {
            "status": TaskStatus.COMPLETED,
            "completed_at": completed_at,
        }
        if actual_duration is not None:
            changes["actual_duration"] = actual_duration
        row = row.model_copy(update=changes)
        self.rows[task_id] = row
        return row

    def delete_task(self, *, user_id: UUID, task_id: UUID) -> bool:
        if self.get_task(user_id=user_id, task_id=task_id) is None:
            return False
        del self.rows[task_id]
        return True

    def get_task_stats(self, *, user_id: UUID, week_start: datetime) -> TaskStats:
        self.stats_week_start = week_start
        owned = [row for row in self.rows.values() if row.user_id == user_id]
        completed = [row for row in owned if row.status == TaskStatus.COMPLETED]
        return TaskStats(
            pending_count=len(owned) - len(completed),
            completed_count=len(completed),
            completed_this_week=len(
                [row for row in completed if row.completed_at and row.completed_at > week_start]
            ),
            total_points=sum(row.points for row in completed),
            avg_duration=None,
        )


def _meta() -> EnvelopeMeta:
    return new_meta(kind=EnvelopeKind.COMMAND, source="test", principal="auth0|tester")


def _service() -> tuple[DefaultTaskService, _FakeTaskRepository, FixedClock]:
    repository = _FakeTaskRepository()
    clock = FixedClock(NOW)
    return DefaultTaskService(repository=repository, clock=clock), repository, clock


def _create(service: DefaultTaskService, user_id: UUID, **data: object) -> TaskRecord:
    result = service.create_task(meta=_meta(), user_id=user_id, data={"title": "t", **data})
    assert result.value is not None, result.errors
    return result.value


def test_create_task_defaults_priority_energy_and_points() -> None:
    """Omitted priority and energy requirement should both default to 3."""
    service, _, _ = _service()

    task = _create(service, uuid4())

    assert task.priority == 3
    assert task.energy_requirement == 3
    assert task.points == 40
    assert task.status == TaskStatus.PENDING


def test_create_task_points_follow_multiplier_tables() -> None:
    """Points should be the rounded product of both multipliers."""
    service, _, _ = _service()
    user_id = uuid4()

    assert _create(service, user_id, priority=5, energy_requirement=5).points == 225
    assert _create(service, user_id, priority=1, energy_requirement=1).points == 5
    assert _create(service, user_id, priority=4, energy_requirement=2).points == 60


def test_create_task_stamps_nested_items_with_clock() -> None:
    """Subtasks and notes without timestamps should take the clock's time."""
    service, _, _ = _service()

    task = _create(
        service,
        uuid4(),
        tags=[{"id": "w1", "label": "work", "color": "#4A90E2"}],
        subtasks=[{"id": "s1", "text": "outline"}],
        notes=[{"id": "n1", "text": "started", "created_at": "2026-03-01T08:00:00Z"}],
        recurrence={"frequency": "weekly", "interval": 2},
    )

    assert task.tags[0].label == "work"
    assert task.subtasks[0].created_at == NOW
    assert task.subtasks[0].completed is False
    assert task.notes[0].created_at == datetime(2026, 3, 1, 8, 0, tzinfo=UTC)
    assert task.recurrence is not None
    assert task.recurrence.is_active is True


def test_create_task_rejects_out_of_range_fields() -> None:
    """Invalid inputs should be rejected before any write."""
    service, repository, _ = _service()

    priority = service.create_task(meta=_meta(), user_id=uuid4(), data={"title": "t", "priority": 0})
    title = service.create_task(meta=_meta(), user_id=uuid4(), data={"title": "x" * 501})
    duration = service.create_task(
        meta=_meta(), user_id=uuid4(), data={"title": "t", "estimated_duration": 0}
    )

    assert priority.errors[0].message.startswith("priority:")
    assert title.errors[0].message.startswith("title:")
    assert duration.errors[0].category == ErrorCategory.VALIDATION
    assert repository.rows == {}


def test_create_task_requires_owned_project() -> None:
    """Assigning another user's project should read as not found."""
    service, repository, _ = _service()
    user_id, project_id = uuid4(), uuid4()

    missing = service.create_task(
        meta=_meta(), user_id=user_id, data={"title": "t", "project_id": str(project_id)}
    )
    repository.projects.add((user_id, project_id))
    owned = service.create_task(
        meta=_meta(), user_id=user_id, data={"title": "t", "project_id": str(project_id)}
    )

    assert missing.errors[0].category == ErrorCategory.NOT_FOUND
    assert owned.value is not None
    assert owned.value.project_id == project_id


def test_update_priority_recomputes_points_with_current_energy() -> None:
    """Changing priority alone should keep the stored energy requirement."""
    service, _, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id, priority=2, energy_requirement=5)

    result = service.update_task(
        meta=_meta(), user_id=user_id, task_id=task.id, data={"priority": 4}
    )

    assert result.value is not None
    assert result.value.points == 120
    assert result.value.energy_requirement == 5


def test_update_energy_requirement_alone_recomputes_points() -> None:
    """Changing only the energy requirement should also recompute points."""
    service, _, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id, priority=5, energy_requirement=3)

    result = service.update_task(
        meta=_meta(), user_id=user_id, task_id=task.id, data={"energy_requirement": 1}
    )

    assert result.value is not None
    assert result.value.points == 75


def test_update_without_scoring_fields_leaves_points_untouched() -> None:
    """Unrelated edits should not write points and may clear nullable fields."""
    service, repository, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id, description="d", due_date="2026-03-12T00:00:00Z")

    result = service.update_task(
        meta=_meta(),
        user_id=user_id,
        task_id=task.id,
        data={"title": "renamed", "due_date": None},
    )

    assert assigned_values(repository.updates[-1]) == {"title": "renamed", "due_date": None}
    assert result.value is not None
    assert result.value.description == "d"
    assert result.value.due_date is None


def test_update_rejects_null_priority() -> None:
    """Non-nullable fields cannot be cleared."""
    service, _, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id)

    result = service.update_task(
        meta=_meta(), user_id=user_id, task_id=task.id, data={"priority": None}
    )

    assert result.errors[0].category == ErrorCategory.VALIDATION


def test_update_missing_task_is_not_found() -> None:
    """Updating an unknown task should be not found."""
    service, _, _ = _service()

    result = service.update_task(
        meta=_meta(), user_id=uuid4(), task_id=uuid4(), data={"priority": 4}
    )

    assert result.errors[0].category == ErrorCategory.NOT_FOUND


def test_complete_with_matching_energy_awards_bonus() -> None:
    """A matching energy level should add a quarter of the points."""
    service, _, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id)

    result = service.complete_task(
        meta=_meta(),
        user_id=user_id,
        task_id=task.id,
        data={"current_energy_level": 3, "actual_duration": 25},
    )

    assert result.value is not None
    assert result.value.bonus_points == 10
    assert result.value.points_earned == 50
    assert result.value.energy_match_bonus is True
    assert result.value.task.status == TaskStatus.COMPLETED
    assert result.value.task.completed_at == NOW
    assert result.value.task.actual_duration == 25


def test_complete_without_energy_level_awards_no_bonus() -> None:
    """Omitting the current level should earn only the base points."""
    service, _, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id)

    result = service.complete_task(meta=_meta(), user_id=user_id, task_id=task.id)

    assert result.value is not None
    assert result.value.bonus_points == 0
    assert result.value.points_earned == 40
    assert result.value.energy_match_bonus is False


def test_complete_twice_is_conflict() -> None:
    """Completion is terminal; a second completion should conflict."""
    service, _, clock = _service()
    user_id = uuid4()
    task = _create(service, user_id)
    service.complete_task(meta=_meta(), user_id=user_id, task_id=task.id)
    clock.advance(timedelta(hours=1))

    again = service.complete_task(meta=_meta(), user_id=user_id, task_id=task.id)

    assert again.errors[0].category == ErrorCategory.CONFLICT
    assert again.errors[0].code == "INVALID_STATE"


def test_complete_foreign_task_is_not_found() -> None:
    """Another user's task should not be completable."""
    service, _, _ = _service()
    task = _create(service, uuid4())

    result = service.complete_task(meta=_meta(), user_id=uuid4(), task_id=task.id)

    assert result.errors[0].category == ErrorCategory.NOT_FOUND


def test_energy_match_listing_scores_and_ranks() -> None:
    """Pending tasks should be scored against the level and ranked best first."""
    service, _, _ = _service()
    user_id = uuid4()
    far = _create(service, user_id, title="far", energy_requirement=5, priority=5)
    near = _create(service, user_id, title="near", energy_requirement=2, priority=1)
    exact = _create(service, user_id, title="exact", energy_requirement=3, priority=1)
    done = _create(service, user_id, title="done", energy_requirement=3, priority=5)
    service.complete_task(meta=_meta(), user_id=user_id, task_id=done.id)

    result = service.list_tasks_with_energy_match(
        meta=_meta(), user_id=user_id, current_energy_level=3
    )

    assert result.value is not None
    assert [item.id for item in result.value] == [exact.id, near.id, far.id]
    assert [item.energy_match_score for item in result.value] == [1.0, 0.5, 0.0]
    assert result.value[0].energy_match is True
    assert result.value[0].bonus_points == 3
    assert result.value[1].bonus_points == 0


def test_energy_match_listing_validates_level() -> None:
    """Levels outside 1-5 should be rejected."""
    service, _, _ = _service()

    result = service.list_tasks_with_energy_match(
        meta=_meta(), user_id=uuid4(), current_energy_level=6
    )

    assert result.errors[0].message.startswith("current_energy_level:")


def test_list_tasks_validates_filters() -> None:
    """Unknown statuses and malformed project ids should be rejected."""
    service, _, _ = _service()

    status = service.list_tasks(meta=_meta(), user_id=uuid4(), status="archived")
    project = service.list_tasks(meta=_meta(), user_id=uuid4(), project_id="not-a-uuid")

    assert status.errors[0].message.startswith("status:")
    assert project.errors[0].message.startswith("project_id:")


def test_stats_window_uses_clock() -> None:
    """Weekly completions should be measured from the injected clock."""
    service, repository, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id)
    service.complete_task(meta=_meta(), user_id=user_id, task_id=task.id)

    result = service.get_task_stats(meta=_meta(), user_id=user_id)

    assert repository.stats_week_start == NOW - timedelta(days=7)
    assert result.value is not None
    assert result.value.completed_this_week == 1
    assert result.value.total_points == 40


def test_delete_task_and_storage_failure() -> None:
    """Delete reports not found for unknown ids; storage errors become dependency errors."""
    service, repository, _ = _service()
    user_id = uuid4()
    task = _create(service, user_id)

    assert service.delete_task(meta=_meta(), user_id=user_id, task_id=task.id).value is True
    missing = service.delete_task(meta=_meta(), user_id=user_id, task_id=task.id)
    repository.raise_on_read = TimeoutError("slow")
    failed = service.get_task(meta=_meta(), user_id=user_id, task_id=task.id)

    assert missing.errors[0].category == ErrorCategory.NOT_FOUND
    assert failed.errors[0].category == ErrorCategory.DEPENDENCY
