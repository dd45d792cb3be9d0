"""SQLAlchemy table definitions owned by the Task Dependencies service."""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    UniqueConstraint,
    Uuid,
    func,
)

from resources.substrates.postgres.metadata import metadata

task_dependencies = Table(
    "task_dependencies",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("task_id", Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
    Column(
        "depends_on_task_id",
        Uuid,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("type", String(20), nullable=False, server_default="requires"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    UniqueConstraint("task_id", "depends_on_task_id"),
    CheckConstraint("task_id <> depends_on_task_id", name="not_self"),
    CheckConstraint("type IN ('blocks', 'requires', 'suggests')", name="type_valid"),
    Index("ix_task_dependencies_depends_on_task_id", "depends_on_task_id"),
)
