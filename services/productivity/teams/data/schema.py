"""SQLAlchemy table definitions owned by the Teams service."""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB

from resources.substrates.postgres.metadata import metadata

_ROLES = "role IN ('owner', 'admin', 'member', 'viewer')"

teams = Table(
    "teams",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("description", Text, nullable=True),
    Column("owner_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("settings", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint("char_length(name) > 0", name="name_not_empty"),
    Index("ix_teams_owner_id", "owner_id"),
)

team_members = Table(
    "team_members",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("team_id", Uuid, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("role", String(20), nullable=False),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("joined_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    UniqueConstraint("team_id", "user_id"),
    CheckConstraint(_ROLES, name="role_valid"),
    CheckConstraint("status IN ('active', 'pending', 'suspended')", name="status_valid"),
    Index("ix_team_members_user_id", "user_id"),
)

team_invites = Table(
    "team_invites",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("team_id", Uuid, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
    Column("email", String(255), nullable=False),
    Column("invited_by", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("role", String(20), nullable=False),
    Column("token", String(255), nullable=False, unique=True),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint(_ROLES, name="role_valid"),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'expired', 'cancelled')", name="status_valid"
    ),
    Index("ix_team_invites_team_id", "team_id"),
    Index("ix_team_invites_email", "email"),
)
