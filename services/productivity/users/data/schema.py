"""SQLAlchemy table definitions owned by the Users service."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Table, Text, Uuid, func, text
from sqlalchemy.dialects.postgresql import JSONB

from resources.substrates.postgres.metadata import metadata

users = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("auth_subject", String(255), nullable=True, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column("timezone", String(64), nullable=False, server_default="UTC"),
    Column("preferences", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)
