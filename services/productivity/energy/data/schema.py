"""SQLAlchemy table definitions owned by the Energy service."""

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
from sqlalchemy.dialects.postgresql import ARRAY

from resources.substrates.postgres.metadata import metadata

energy_logs = Table(
    "energy_logs",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("energy_level", Integer, nullable=False),
    Column("mood_tags", ARRAY(String(50)), nullable=True),
    Column("notes", Text, nullable=True),
    Column("logged_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("energy_level BETWEEN 1 AND 5", name="energy_level_range"),
    Index("ix_energy_logs_user_id_logged_at", "user_id", "logged_at"),
)
