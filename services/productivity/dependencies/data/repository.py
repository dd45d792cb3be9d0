"""Postgres repository for task dependency edges."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, exists, insert, select

from resources.substrates.postgres import SessionProvider
from services.productivity.dependencies.domain import (
    DependencyType,
    DependentView,
    PrerequisiteView,
    TaskDependencyRecord,
)
from services.productivity.dependencies.interfaces import DependencyRepository
from services.productivity.tasks.data.schema import tasks

from .schema import task_dependencies


class PostgresDependencyRepository(DependencyRepository):
    """SQL repository over the ``task_dependencies`` table."""

    def __init__(self, sessions: SessionProvider) -> None:
        self._sessions = sessions

    def task_owned(self, *, user_id: UUID, task_id: UUID) -> bool:
        with self._sessions.session() as session:
            return bool(
                session.execute(
                    select(exists().where(tasks.c.id == task_id, tasks.c.user_id == user_id))
                ).scalar()
            )

    def dependency_exists(self, *, task_id: UUID, depends_on_task_id: UUID) -> bool:
        with self._sessions.session() as session:
            return bool(
                session.execute(
                    select(
                        exists().where(
                            task_dependencies.c.task_id == task_id,
                            task_dependencies.c.depends_on_task_id == depends_on_task_id,
                        )
                    )
                ).scalar()
            )

    def prerequisite_ids(self, *, task_id: UUID) -> list[UUID]:
        with self._sessions.session() as session:
            rows = session.execute(
                select(task_dependencies.c.depends_on_task_id).where(
                    task_dependencies.c.task_id == task_id
                )
            )
            return list(rows.scalars().all())

    def create_dependency(
        self, *, task_id: UUID, depends_on_task_id: UUID, type: DependencyType
    ) -> TaskDependencyRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(task_dependencies)
                    .values(
                        id=uuid4(),
                        task_id=task_id,
                        depends_on_task_id=depends_on_task_id,
                        type=type.value,
                    )
                    .returning(task_dependencies)
                )
                .mappings()
                .one()
            )
            return TaskDependencyRecord.model_validate(dict(row))

    def list_prerequisites(self, *, task_id: UUID) -> list[PrerequisiteView]:
        with self._sessions.session() as session:
            rows = session.execute(prerequisites_statement(task_id))
            return [PrerequisiteView.model_validate(dict(row)) for row in rows.mappings().all()]

    def list_dependents(self, *, task_id: UUID) -> list[DependentView]:
        with self._sessions.session() as session:
            rows = session.execute(dependents_statement(task_id))
            return [DependentView.model_validate(dict(row)) for row in rows.mappings().all()]

    def delete_dependency(self, *, task_id: UUID, dependency_id: UUID) -> bool:
        with self._sessions.session() as session:
            result = session.execute(
                delete(task_dependencies).where(
                    task_dependencies.c.id == dependency_id,
                    task_dependencies.c.task_id == task_id,
                )
            )
            return int(result.rowcount or 0) > 0


def prerequisites_statement(task_id: UUID) -> Any:
    """Build the edges-out query joined to each prerequisite task."""
    return (
        select(
            task_dependencies,
            tasks.c.title.label("depends_on_title"),
            tasks.c.status.label("depends_on_status"),
            tasks.c.priority.label("depends_on_priority"),
        )
        .select_from(
            task_dependencies.join(tasks, tasks.c.id == task_dependencies.c.depends_on_task_id)
        )
        .where(task_dependencies.c.task_id == task_id)
        .order_by(task_dependencies.c.created_at.desc())
    )


def dependents_statement(task_id: UUID) -> Any:
    """Build the edges-in query joined to each dependent task."""
    return (
        select(
            task_dependencies,
            tasks.c.title.label("task_title"),
            tasks.c.status.label("task_status"),
        )
        .select_from(task_dependencies.join(tasks, tasks.c.id == task_dependencies.c.task_id))
        .where(task_dependencies.c.depends_on_task_id == task_id)
        .order_by(task_dependencies.c.created_at.desc())
    )
