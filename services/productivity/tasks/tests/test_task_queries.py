"""SQL assembly tests for the Tasks repository."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy.dialects import postgresql

from services.productivity.tasks.data.repository import (
    energy_match_statement,
    list_tasks_statement,
    task_stats_statement,
)
from services.productivity.tasks.domain import TaskStatus
from services.productivity.tasks.interfaces import TaskFilters


def _sql(statement) -> str:
    return " ".join(str(statement.compile(dialect=postgresql.dialect())).split())


def test_list_statement_orders_by_priority_then_due_nulls_last() -> None:
    """Listing should join project summaries and put undated tasks last."""
    sql = _sql(list_tasks_statement(uuid4(), TaskFilters(), 100, 0))

    assert "LEFT OUTER JOIN projects ON tasks.project_id = projects.id" in sql
    assert "ORDER BY tasks.priority DESC, tasks.due_date ASC NULLS LAST" in sql


def test_list_statement_only_adds_supplied_filters() -> None:
    """Absent filters should not constrain the query."""
    unfiltered = _sql(list_tasks_statement(uuid4(), TaskFilters(), 100, 0))
    filtered = _sql(
        list_tasks_statement(
            uuid4(),
            TaskFilters(status=TaskStatus.COMPLETED, project_id=uuid4(), priority=4),
            10,
            0,
        )
    )

    assert "tasks.status =" not in unfiltered
    assert "tasks.status =" in filtered
    assert "tasks.project_id =" in filtered
    assert "tasks.priority =" in filtered


def test_energy_match_statement_scores_with_case_and_filters_pending() -> None:
    """Energy matching should rank by a CASE score and only read pending tasks."""
    statement = energy_match_statement(uuid4(), 3, TaskFilters(priority=2))
    sql = _sql(statement)
    params = statement.compile(dialect=postgresql.dialect()).params

    assert "CASE WHEN (tasks.energy_requirement = " in sql
    assert "abs(tasks.energy_requirement - " in sql
    assert (
        "ORDER BY energy_match_score DESC, tasks.priority DESC, tasks.due_date ASC NULLS LAST"
        in sql
    )
    assert "pending" in params.values()


def test_stats_statement_filters_week_and_completed() -> None:
    """Stats should aggregate with FILTER clauses scoped to one user."""
    sql = _sql(task_stats_statement(uuid4(), datetime(2026, 3, 3, tzinfo=UTC)))

    assert "count(*) FILTER (WHERE tasks.status = " in sql
    assert "tasks.completed_at > " in sql
    assert "avg(tasks.actual_duration) FILTER" in sql
    assert "WHERE tasks.user_id = " in sql
