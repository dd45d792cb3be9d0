"""SQLAlchemy table definitions owned by the Tasks service."""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB

from resources.substrates.postgres.metadata import metadata

tasks = Table(
    "tasks",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "project_id",
        Uuid,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("title", String(500), nullable=False),
    Column("description", Text, nullable=True),
    Column("energy_requirement", Integer, nullable=False, server_default="3"),
    Column("priority", Integer, nullable=False, server_default="3"),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("due_date", DateTime(timezone=True), nullable=True),
    Column("completed_at", DateTime(timezone=True), nullable=True),
    Column("estimated_duration", Integer, nullable=True),
    Column("actual_duration", Integer, nullable=True),
    Column("points", Integer, nullable=False, server_default="0"),
    Column("tags", JSONB, nullable=False, server_default=text("'[]'::jsonb")),
    Column("subtasks", JSONB, nullable=False, server_default=text("'[]'::jsonb")),
    Column("notes", JSONB, nullable=False, server_default=text("'[]'::jsonb")),
    Column("recurrence", JSONB(none_as_null=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint("energy_requirement BETWEEN 1 AND 5", name="energy_requirement_range"),
    CheckConstraint("priority BETWEEN 1 AND 5", name="priority_range"),
    CheckConstraint("status IN ('pending', 'completed')", name="status_valid"),
    CheckConstraint(
        "estimated_duration IS NULL OR estimated_duration > 0",
        name="estimated_duration_positive",
    ),
    CheckConstraint(
        "actual_duration IS NULL OR actual_duration > 0",
        name="actual_duration_positive",
    ),
    Index("ix_tasks_user_id_status", "user_id", "status"),
    Index(
        "ix_tasks_user_id_due_date_pending",
        "user_id",
        "due_date",
        postgresql_where=text("status = 'pending'"),
    ),
    Index(
        "ix_tasks_project_id",
        "project_id",
        postgresql_where=text("project_id IS NOT NULL"),
    ),
)
