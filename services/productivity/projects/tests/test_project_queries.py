"""SQL assembly tests for the Projects repository."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy.dialects import postgresql

from services.productivity.projects.data.repository import (
    list_projects_statement,
    project_stats_statement,
)
from services.productivity.projects.domain import ProjectStatus


def _sql(statement) -> str:
    return " ".join(str(statement.compile(dialect=postgresql.dialect())).split())


def test_list_statement_orders_by_priority_then_created() -> None:
    """Listing should sort priority desc then created_at desc."""
    sql = _sql(list_projects_statement(uuid4(), None, 100, 0))

    assert "ORDER BY projects.priority DESC, projects.created_at DESC" in sql
    assert "projects.status" not in sql.split("WHERE", 1)[1]


def test_list_statement_adds_status_filter_when_given() -> None:
    """A status filter should add a status predicate."""
    sql = _sql(list_projects_statement(uuid4(), ProjectStatus.ARCHIVED, 10, 5))

    assert "projects.status = " in sql
    assert "LIMIT" in sql and "OFFSET" in sql


def test_stats_statement_left_joins_tasks_with_filtered_aggregates() -> None:
    """Stats should count per status and sum completed points over a left join."""
    sql = _sql(project_stats_statement(uuid4(), uuid4()))

    assert "LEFT OUTER JOIN tasks ON tasks.project_id = projects.id" in sql
    assert "count(tasks.id) FILTER (WHERE tasks.status = " in sql
    assert "coalesce(sum(tasks.points) FILTER (WHERE tasks.status = " in sql
    assert "GROUP BY projects.id" in sql
