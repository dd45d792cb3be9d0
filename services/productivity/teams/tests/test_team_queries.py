"""SQL assembly tests for the Teams repository."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy.dialects import postgresql

from services.productivity.teams.data.repository import (
    hourly_energy_statement,
    task_totals_statement,
    team_view_statement,
    top_performers_statement,
)


def _sql(statement) -> str:
    return " ".join(str(statement.compile(dialect=postgresql.dialect())).split())


def test_team_view_counts_only_active_members() -> None:
    sql = _sql(team_view_statement(uuid4()))

    assert "LEFT OUTER JOIN team_members ON team_members.team_id = teams.id" in sql
    assert "team_members.status = " in sql
    assert "GROUP BY teams.id" in sql


def test_task_totals_window_is_optional() -> None:
    """The created-at predicate appears only for bounded periods."""
    bounded = _sql(task_totals_statement(uuid4(), datetime(2026, 3, 1, tzinfo=UTC)))
    unbounded = _sql(task_totals_statement(uuid4(), None))

    assert "tasks.created_at >= " in bounded
    assert "tasks.created_at" not in unbounded
    assert "count(tasks.id) FILTER (WHERE tasks.status = " in bounded


def test_top_performers_use_correlated_subqueries() -> None:
    """Completions and energy are computed separately and ranked by both."""
    sql = _sql(top_performers_statement(uuid4(), None, 10))

    assert "ORDER BY completed_tasks DESC, energy_level DESC" in sql
    assert "LIMIT" in sql
    assert "LEFT OUTER JOIN" not in sql


def test_hourly_energy_buckets_in_team_zone() -> None:
    sql = _sql(hourly_energy_statement(uuid4(), None, "Europe/Berlin"))

    assert "timezone(" in sql
    assert "EXTRACT(hour FROM" in sql
    assert "GROUP BY" in sql
