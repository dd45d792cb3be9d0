"""Postgres repository for projects."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, func, insert, select, update

from packages.cadence_shared.unset import assigned_values
from resources.substrates.postgres import SessionProvider
from services.productivity.projects.domain import (
    ProjectRecord,
    ProjectStatus,
    ProjectWithStats,
)
from services.productivity.projects.interfaces import (
    NewProject,
    ProjectRepository,
    ProjectUpdate,
)
from services.productivity.tasks.data.schema import tasks

from .schema import projects


class PostgresProjectRepository(ProjectRepository):
    """SQL repository over the ``projects`` table."""

    def __init__(self, sessions: SessionProvider) -> None:
        self._sessions = sessions

    def create_project(self, *, user_id: UUID, project: NewProject) -> ProjectRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(projects)
                    .values(
                        id=uuid4(),
                        user_id=user_id,
                        name=project.name,
                        description=project.description,
                        color=project.color,
                        energy_requirement=project.energy_requirement,
                        priority=project.priority,
                        status=ProjectStatus.ACTIVE.value,
                    )
                    .returning(projects)
                )
                .mappings()
                .one()
            )
            return ProjectRecord.model_validate(dict(row))

    def list_projects(
        self,
        *,
        user_id: UUID,
        status: ProjectStatus | None,
        limit: int,
        offset: int,
    ) -> list[ProjectRecord]:
        with self._sessions.session() as session:
            rows = session.execute(list_projects_statement(user_id, status, limit, offset))
            return [ProjectRecord.model_validate(dict(row)) for row in rows.mappings().all()]

    def get_project_with_stats(
        self, *, user_id: UUID, project_id: UUID
    ) -> ProjectWithStats | None:
        with self._sessions.session() as session:
            row = (
                session.execute(project_stats_statement(user_id, project_id))
                .mappings()
                .one_or_none()
            )
            return None if row is None else ProjectWithStats.model_validate(dict(row))

    def update_project(
        self, *, user_id: UUID, project_id: UUID, update: ProjectUpdate
    ) -> ProjectRecord | None:
        values = assigned_values(update)
        if "status" in values:
            values["status"] = ProjectStatus(values["status"]).value
        owned = and_(projects.c.id == project_id, projects.c.user_id == user_id)
        with self._sessions.session() as session:
            if not values:
                row = session.execute(select(projects).where(owned)).mappings().one_or_none()
            else:
                row = (
                    session.execute(
                        update(projects).where(owned).values(**values).returning(projects)
                    )
                    .mappings()
                    .one_or_none()
                )
            return None if row is None else ProjectRecord.model_validate(dict(row))

    def delete_project(self, *, user_id: UUID, project_id: UUID) -> bool:
        with self._sessions.session() as session:
            result = session.execute(
                delete(projects).where(
                    projects.c.id == project_id, projects.c.user_id == user_id
                )
            )
            return int(result.rowcount or 0) > 0


def list_projects_statement(
    user_id: UUID, status: ProjectStatus | None, limit: int, offset: int
) -> Any:
    """Build the owner-scoped project listing query."""
    statement = select(projects).where(projects.c.user_id == user_id)
    if status is not None:
        statement = statement.where(projects.c.status == status.value)
    return (
        statement.order_by(projects.c.priority.desc(), projects.c.created_at.desc())
        .limit(limit)
        .offset(offset)
    )


def project_stats_statement(user_id: UUID, project_id: UUID) -> Any:
    """Build the project-with-rollups query over a left join to tasks."""
    pending = func.count(tasks.c.id).filter(tasks.c.status == "pending")
    completed = func.count(tasks.c.id).filter(tasks.c.status == "completed")
    earned = func.coalesce(
        func.sum(tasks.c.points).filter(tasks.c.status == "completed"), 0
    )
    return (
        select(
            projects,
            pending.label("pending_tasks"),
            completed.label("completed_tasks"),
            earned.label("total_points"),
        )
        .select_from(projects.outerjoin(tasks, tasks.c.project_id == projects.c.id))
        .where(projects.c.id == project_id, projects.c.user_id == user_id)
        .group_by(projects.c.id)
    )
