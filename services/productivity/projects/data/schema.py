"""SQLAlchemy table definitions owned by the Projects service."""

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
)

from resources.substrates.postgres.metadata import metadata

projects = Table(
    "projects",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("color", String(7), nullable=False, server_default="#6366f1"),
    Column("energy_requirement", Integer, nullable=True),
    Column("priority", Integer, nullable=False, server_default="3"),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint(
        "energy_requirement IS NULL OR energy_requirement BETWEEN 1 AND 5",
        name="energy_requirement_range",
    ),
    CheckConstraint("priority BETWEEN 1 AND 5", name="priority_range"),
    CheckConstraint("status IN ('active', 'archived')", name="status_valid"),
    Index("ix_projects_user_id_status", "user_id", "status"),
)
