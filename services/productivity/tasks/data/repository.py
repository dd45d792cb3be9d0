"""Postgres repository for tasks."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlalchemy import and_, case, delete, func, insert, select, update

from packages.cadence_shared.unset import assigned_values
from resources.substrates.postgres import SessionProvider
from services.productivity.projects.data.schema import projects
from services.productivity.scoring.matching import (
    ADJACENT_MATCH_SCORE,
    EXACT_MATCH_SCORE,
    NO_MATCH_SCORE,
)
from services.productivity.tasks.domain import (
    ProjectSummary,
    TaskRecord,
    TaskStats,
    TaskStatus,
    TaskView,
)
from services.productivity.tasks.interfaces import (
    NewTask,
    TaskFilters,
    TaskRepository,
    TaskUpdate,
)

from .schema import tasks

_PROJECT_COLUMNS = (
    projects.c.id.label("project_summary_id"),
    projects.c.name.label("project_summary_name"),
    projects.c.color.label("project_summary_color"),
)


class PostgresTaskRepository(TaskRepository):
    """SQL repository over the ``tasks`` table."""

    def __init__(self, sessions: SessionProvider) -> None:
        self._sessions = sessions

    def create_task(self, *, user_id: UUID, task: NewTask) -> TaskRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(tasks)
                    .values(
                        id=uuid4(),
                        user_id=user_id,
                        project_id=task.project_id,
                        title=task.title,
                        description=task.description,
                        energy_requirement=task.energy_requirement,
                        priority=task.priority,
                        status=TaskStatus.PENDING.value,
                        due_date=task.due_date,
                        estimated_duration=task.estimated_duration,
                        points=task.points,
                        tags=_json(task.tags),
                        subtasks=_json(task.subtasks),
                        notes=_json(task.notes),
                        recurrence=_json(task.recurrence),
                    )
                    .returning(tasks)
                )
                .mappings()
                .one()
            )
            return _to_task(row)

    def get_task(self, *, user_id: UUID, task_id: UUID) -> TaskRecord | None:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    select(tasks).where(tasks.c.id == task_id, tasks.c.user_id == user_id)
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_task(row)

    def list_tasks(
        self, *, user_id: UUID, filters: TaskFilters, limit: int, offset: int
    ) -> list[TaskView]:
        with self._sessions.session() as session:
            rows = session.execute(list_tasks_statement(user_id, filters, limit, offset))
            return [_to_view(row) for row in rows.mappings().all()]

    def list_pending_by_energy_match(
        self, *, user_id: UUID, current_energy_level: int, filters: TaskFilters
    ) -> list[TaskView]:
        with self._sessions.session() as session:
            rows = session.execute(
                energy_match_statement(user_id, current_energy_level, filters)
            )
            return [_to_view(row) for row in rows.mappings().all()]

    def project_exists(self, *, user_id: UUID, project_id: UUID) -> bool:
        with self._sessions.session() as session:
            found = session.execute(
                select(projects.c.id).where(
                    projects.c.id == project_id, projects.c.user_id == user_id
                )
            ).first()
            return found is not None

    def update_task(
        self, *, user_id: UUID, task_id: UUID, update: TaskUpdate
    ) -> TaskRecord | None:
        values = {name: _json(value) for name, value in assigned_values(update).items()}
        if not values:
            return self.get_task(user_id=user_id, task_id=task_id)
        with self._sessions.session() as session:
            row = (
                session.execute(
                    update(tasks)
                    .where(tasks.c.id == task_id, tasks.c.user_id == user_id)
                    .values(**values)
                    .returning(tasks)
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_task(row)

    def complete_task(
        self,
        *,
        user_id: UUID,
        task_id: UUID,
        completed_at: datetime,
        actual_duration: int | None,
    ) -> TaskRecord | None:
        values: dict[str, Any] = {
            "status": TaskStatus.COMPLETED.value,
            "completed_at": completed_at,
        }
        if actual_duration is not None:
            values["actual_duration"] = actual_duration
        with self._sessions.session() as session:
            row = (
                session.execute(
                    update(tasks)
                    .where(
                        tasks.c.id == task_id,
                        tasks.c.user_id == user_id,
                        tasks.c.status == TaskStatus.PENDING.value,
                    )
                    .values(**values)
                    .returning(tasks)
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_task(row)

    def delete_task(self, *, user_id: UUID, task_id: UUID) -> bool:
        with self._sessions.session() as session:
            result = session.execute(
                delete(tasks).where(tasks.c.id == task_id, tasks.c.user_id == user_id)
            )
            return int(result.rowcount or 0) > 0

    def get_task_stats(self, *, user_id: UUID, week_start: datetime) -> TaskStats:
        with self._sessions.session() as session:
            row = session.execute(task_stats_statement(user_id, week_start)).mappings().one()
            return TaskStats(
                pending_count=int(row["pending_count"]),
                completed_count=int(row["completed_count"]),
                completed_this_week=int(row["completed_this_week"]),
                total_points=int(row["total_points"]),
                avg_duration=(
                    None if row["avg_duration"] is None else float(row["avg_duration"])
                ),
            )


def _filtered(statement: Any, user_id: UUID, filters: TaskFilters) -> Any:
    statement = statement.where(tasks.c.user_id == user_id)
    if filters.status is not None:
        statement = statement.where(tasks.c.status == filters.status.value)
    if filters.project_id is not None:
        statement = statement.where(tasks.c.project_id == filters.project_id)
    if filters.priority is not None:
        statement = statement.where(tasks.c.priority == filters.priority)
    return statement


def list_tasks_statement(
    user_id: UUID, filters: TaskFilters, limit: int, offset: int
) -> Any:
    """Build the owner-scoped listing with a left-joined project summary."""
    statement = select(tasks, *_PROJECT_COLUMNS).select_from(
        tasks.outerjoin(projects, tasks.c.project_id == projects.c.id)
    )
    return (
        _filtered(statement, user_id, filters)
        .order_by(tasks.c.priority.desc(), tasks.c.due_date.asc().nulls_last())
        .limit(limit)
        .offset(offset)
    )


def energy_match_statement(
    user_id: UUID, current_energy_level: int, filters: TaskFilters
) -> Any:
    """Build the pending-task query ranked by energy match in SQL."""
    score = case(
        (tasks.c.energy_requirement == current_energy_level, EXACT_MATCH_SCORE),
        (
            func.abs(tasks.c.energy_requirement - current_energy_level) == 1,
            ADJACENT_MATCH_SCORE,
        ),
        else_=NO_MATCH_SCORE,
    ).label("energy_match_score")
    statement = select(tasks, *_PROJECT_COLUMNS, score).select_from(
        tasks.outerjoin(projects, tasks.c.project_id == projects.c.id)
    )
    pending = TaskFilters(
        status=TaskStatus.PENDING,
        project_id=filters.project_id,
        priority=filters.priority,
    )
    return _filtered(statement, user_id, pending).order_by(
        score.desc(),
        tasks.c.priority.desc(),
        tasks.c.due_date.asc().nulls_last(),
    )


def task_stats_statement(user_id: UUID, week_start: datetime) -> Any:
    """Build the per-user task rollup query."""
    completed = tasks.c.status == TaskStatus.COMPLETED.value
    return select(
        func.count().filter(tasks.c.status == TaskStatus.PENDING.value).label("pending_count"),
        func.count().filter(completed).label("completed_count"),
        func.count()
        .filter(and_(completed, tasks.c.completed_at > week_start))
        .label("completed_this_week"),
        func.coalesce(func.sum(tasks.c.points).filter(completed), 0).label("total_points"),
        func.avg(tasks.c.actual_duration)
        .filter(and_(completed, tasks.c.actual_duration.is_not(None)))
        .label("avg_duration"),
    ).where(tasks.c.user_id == user_id)


def _json(value: Any) -> Any:
    """Render nested value objects into JSON-ready structures."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_json(item) for item in value]
    return value


def _to_task(row: Mapping[str, Any]) -> TaskRecord:
    return TaskRecord.model_validate({name: row[name] for name in tasks.c.keys()})


def _to_view(row: Mapping[str, Any]) -> TaskView:
    project = None
    if row["project_summary_id"] is not None:
        project = ProjectSummary(
            id=row["project_summary_id"],
            name=row["project_summary_name"],
            color=row["project_summary_color"],
        )
    return TaskView.model_validate(
        {**{name: row[name] for name in tasks.c.keys()}, "project": project}
    )
