"""create cadence productivity tables"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_EMPTY_JSON_ARRAY = sa.text("'[]'::jsonb")
_EMPTY_JSON_OBJECT = sa.text("'{}'::jsonb")
_ROLES = "role IN ('owner', 'admin', 'member', 'viewer')"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    ]


def _user_fk(table: str, column: str = "user_id") -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], ["users.id"], name=f"fk_{table}_{column}_users", ondelete="CASCADE"
    )


def upgrade() -> None:
    """Create every Cadence table, index and constraint."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("auth_subject", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default="UTC"),
        sa.Column(
            "preferences", postgresql.JSONB(), nullable=False, server_default=_EMPTY_JSON_OBJECT
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("auth_subject", name="uq_users_auth_subject"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=False, server_default="#6366f1"),
        sa.Column("energy_requirement", sa.Integer(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_projects"),
        _user_fk("projects"),
        sa.CheckConstraint(
            "energy_requirement IS NULL OR energy_requirement BETWEEN 1 AND 5",
            name="ck_projects_energy_requirement_range",
        ),
        sa.CheckConstraint("priority BETWEEN 1 AND 5", name="ck_projects_priority_range"),
        sa.CheckConstraint(
            "status IN ('active', 'archived')", name="ck_projects_status_valid"
        ),
    )
    op.create_index("ix_projects_user_id_status", "projects", ["user_id", "status"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("energy_requirement", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("estimated_duration", sa.Integer(), nullable=True),
        sa.Column("actual_duration", sa.Integer(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY),
        sa.Column(
            "subtasks", postgresql.JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY
        ),
        sa.Column("notes", postgresql.JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY),
        sa.Column("recurrence", postgresql.JSONB(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
        _user_fk("tasks"),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            name="fk_tasks_project_id_projects",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "energy_requirement BETWEEN 1 AND 5", name="ck_tasks_energy_requirement_range"
        ),
        sa.CheckConstraint("priority BETWEEN 1 AND 5", name="ck_tasks_priority_range"),
        sa.CheckConstraint("status IN ('pending', 'completed')", name="ck_tasks_status_valid"),
        sa.CheckConstraint(
            "estimated_duration IS NULL OR estimated_duration > 0",
            name="ck_tasks_estimated_duration_positive",
        ),
        sa.CheckConstraint(
            "actual_duration IS NULL OR actual_duration > 0",
            name="ck_tasks_actual_duration_positive",
        ),
    )
    op.create_index("ix_tasks_user_id_status", "tasks", ["user_id", "status"])
    op.create_index(
        "ix_tasks_user_id_due_date_pending",
        "tasks",
        ["user_id", "due_date"],
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "ix_tasks_project_id",
        "tasks",
        ["project_id"],
        postgresql_where=sa.text("project_id IS NOT NULL"),
    )

    op.create_table(
        "energy_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("energy_level", sa.Integer(), nullable=False),
        sa.Column("mood_tags", postgresql.ARRAY(sa.String(length=50)), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "logged_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.PrimaryKeyConstraint("id", name="pk_energy_logs"),
        _user_fk("energy_logs"),
        sa.CheckConstraint(
            "energy_level BETWEEN 1 AND 5", name="ck_energy_logs_energy_level_range"
        ),
    )
    op.create_index(
        "ix_energy_logs_user_id_logged_at", "energy_logs", ["user_id", "logged_at"]
    )

    op.create_table(
        "task_dependencies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("task_id", sa.Uuid(), nullable=False),
        sa.Column("depends_on_task_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="requires"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.PrimaryKeyConstraint("id", name="pk_task_dependencies"),
        sa.ForeignKeyConstraint(
            ["task_id"],
            ["tasks.id"],
            name="fk_task_dependencies_task_id_tasks",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["depends_on_task_id"],
            ["tasks.id"],
            name="fk_task_dependencies_depends_on_task_id_tasks",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "task_id",
            "depends_on_task_id",
            name="uq_task_dependencies_task_id_depends_on_task_id",
        ),
        sa.CheckConstraint(
            "task_id <> depends_on_task_id", name="ck_task_dependencies_not_self"
        ),
        sa.CheckConstraint(
            "type IN ('blocks', 'requires', 'suggests')", name="ck_task_dependencies_type_valid"
        ),
    )
    op.create_index(
        "ix_task_dependencies_depends_on_task_id", "task_dependencies", ["depends_on_task_id"]
    )

    op.create_table(
        "teams",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column(
            "settings", postgresql.JSONB(), nullable=False, server_default=_EMPTY_JSON_OBJECT
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_teams"),
        _user_fk("teams", "owner_id"),
        sa.CheckConstraint("char_length(name) > 0", name="ck_teams_name_not_empty"),
    )
    op.create_index("ix_teams_owner_id", "teams", ["owner_id"])

    op.create_table(
        "team_members",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("team_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column(
            "joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.PrimaryKeyConstraint("id", name="pk_team_members"),
        sa.ForeignKeyConstraint(
            ["team_id"], ["teams.id"], name="fk_team_members_team_id_teams", ondelete="CASCADE"
        ),
        _user_fk("team_members"),
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_members_team_id_user_id"),
        sa.CheckConstraint(_ROLES, name="ck_team_members_role_valid"),
        sa.CheckConstraint(
            "status IN ('active', 'pending', 'suspended')", name="ck_team_members_status_valid"
        ),
    )
    op.create_index("ix_team_members_user_id", "team_members", ["user_id"])

    op.create_table(
        "team_invites",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("team_id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("invited_by", sa.Uuid(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("token", sa.String(length=255), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.PrimaryKeyConstraint("id", name="pk_team_invites"),
        sa.ForeignKeyConstraint(
            ["team_id"], ["teams.id"], name="fk_team_invites_team_id_teams", ondelete="CASCADE"
        ),
        _user_fk("team_invites", "invited_by"),
        sa.UniqueConstraint("token", name="uq_team_invites_token"),
        sa.CheckConstraint(_ROLES, name="ck_team_invites_role_valid"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'expired', 'cancelled')",
            name="ck_team_invites_status_valid",
        ),
    )
    op.create_index("ix_team_invites_team_id", "team_invites", ["team_id"])
    op.create_index("ix_team_invites_email", "team_invites", ["email"])


def downgrade() -> None:
    """Drop every Cadence table in reverse dependency order."""
    op.drop_table("team_invites")
    op.drop_table("team_members")
    op.drop_table("teams")
    op.drop_table("task_dependencies")
    op.drop_table("energy_logs")
    op.drop_table("tasks")
    op.drop_table("projects")
    op.drop_table("users")
