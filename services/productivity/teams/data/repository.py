"""Postgres repository for teams, memberships and invitations."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Integer, and_, cast, extract, func, insert, select

from resources.substrates.postgres import SessionProvider
from services.productivity.energy.data.schema import energy_logs
from services.productivity.tasks.data.schema import tasks
from services.productivity.teams.domain import (
    InviteStatus,
    MemberStatus,
    PerformerStats,
    TeamActivity,
    TeamHourlyEnergy,
    TeamInviteRecord,
    TeamMemberRecord,
    TeamMemberView,
    TeamRecord,
    TeamRole,
    TeamView,
)
from services.productivity.teams.interfaces import NewInvite, NewTeam, TeamRepository
from services.productivity.users.data.schema import users

from .schema import team_invites, team_members, teams


class PostgresTeamRepository(TeamRepository):
    """SQL repository over the ``teams``, ``team_members`` and ``team_invites`` tables."""

    def __init__(self, sessions: SessionProvider) -> None:
        self._sessions = sessions

    def create_team(self, *, owner_id: UUID, team: NewTeam) -> TeamRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(teams)
                    .values(
                        id=uuid4(),
                        name=team.name,
                        description=team.description,
                        owner_id=owner_id,
                        settings=team.settings.model_dump(mode="json"),
                    )
                    .returning(teams)
                )
                .mappings()
                .one()
            )
            session.execute(
                insert(team_members).values(
                    id=uuid4(),
                    team_id=row["id"],
                    user_id=owner_id,
                    role=TeamRole.OWNER.value,
                    status=MemberStatus.ACTIVE.value,
                )
            )
            return TeamRecord.model_validate(dict(row))

    def get_membership(self, *, team_id: UUID, user_id: UUID) -> TeamMemberRecord | None:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    select(team_members).where(
                        team_members.c.team_id == team_id, team_members.c.user_id == user_id
                    )
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else TeamMemberRecord.model_validate(dict(row))

    def get_team(self, *, team_id: UUID) -> TeamView | None:
        with self._sessions.session() as session:
            row = session.execute(team_view_statement(team_id)).mappings().one_or_none()
            return None if row is None else TeamView.model_validate(dict(row))

    def list_members(self, *, team_id: UUID) -> list[TeamMemberView]:
        with self._sessions.session() as session:
            rows = session.execute(members_statement(team_id))
            return [TeamMemberView.model_validate(dict(row)) for row in rows.mappings().all()]

    def create_invite(self, *, invite: NewInvite) -> TeamInviteRecord:
        with self._sessions.session() as session:
            row = (
                session.execute(
                    insert(team_invites)
                    .values(
                        id=uuid4(),
                        team_id=invite.team_id,
                        email=invite.email,
                        invited_by=invite.invited_by,
                        role=invite.role.value,
                        token=invite.token,
                        expires_at=invite.expires_at,
                        status=InviteStatus.PENDING.value,
                    )
                    .returning(team_invites)
                )
                .mappings()
                .one()
            )
            return TeamInviteRecord.model_validate(dict(row))

    def team_activity(
        self, *, team_id: UUID, since: datetime | None, timezone: str, limit: int
    ) -> TeamActivity:
        with self._sessions.session() as session:
            totals = session.execute(task_totals_statement(team_id, since)).mappings().one()
            average_energy = session.execute(average_energy_statement(team_id, since)).scalar()
            performers = session.execute(top_performers_statement(team_id, since, limit))
            hourly = session.execute(hourly_energy_statement(team_id, since, timezone))
            completions = dict(
                session.execute(hourly_completions_statement(team_id, since, timezone)).tuples()
            )
            return TeamActivity(
                total_tasks=int(totals["total_tasks"]),
                completed_tasks=int(totals["completed_tasks"]),
                average_energy=None if average_energy is None else float(average_energy),
                top_performers=[
                    PerformerStats(
                        user_id=row["user_id"],
                        name=row["name"],
                        completed_tasks=int(row["completed_tasks"]),
                        energy_level=float(row["energy_level"]),
                    )
                    for row in performers.mappings().all()
                ],
                energy_patterns=[
                    TeamHourlyEnergy(
                        hour=int(row["hour"]),
                        average_energy=float(row["average_energy"]),
                        task_count=int(completions.get(row["hour"], 0)),
                    )
                    for row in hourly.mappings().all()
                ],
            )


def _active_member_ids(team_id: UUID) -> Any:
    return select(team_members.c.user_id).where(
        team_members.c.team_id == team_id,
        team_members.c.status == MemberStatus.ACTIVE.value,
    )


def team_view_statement(team_id: UUID) -> Any:
    """Build the team read with its active member count."""
    active = and_(
        team_members.c.team_id == teams.c.id,
        team_members.c.status == MemberStatus.ACTIVE.value,
    )
    return (
        select(teams, func.count(team_members.c.id).label("member_count"))
        .select_from(teams.outerjoin(team_members, active))
        .where(teams.c.id == team_id)
        .group_by(teams.c.id)
    )


def members_statement(team_id: UUID) -> Any:
    """Build the membership listing joined to user profiles."""
    return (
        select(team_members, users.c.email, users.c.name, users.c.avatar_url)
        .select_from(team_members.join(users, users.c.id == team_members.c.user_id))
        .where(team_members.c.team_id == team_id)
        .order_by(team_members.c.joined_at.desc())
    )


def task_totals_statement(team_id: UUID, since: datetime | None) -> Any:
    """Build created/completed task counts across active members."""
    statement = select(
        func.count(tasks.c.id).label("total_tasks"),
        func.count(tasks.c.id).filter(tasks.c.status == "completed").label("completed_tasks"),
    ).where(tasks.c.user_id.in_(_active_member_ids(team_id)))
    if since is not None:
        statement = statement.where(tasks.c.created_at >= since)
    return statement


def average_energy_statement(team_id: UUID, since: datetime | None) -> Any:
    """Build the mean energy level across active members."""
    statement = select(func.avg(energy_logs.c.energy_level)).where(
        energy_logs.c.user_id.in_(_active_member_ids(team_id))
    )
    if since is not None:
        statement = statement.where(energy_logs.c.logged_at >= since)
    return statement


def top_performers_statement(team_id: UUID, since: datetime | None, limit: int) -> Any:
    """Build the per-member ranking by completions, then mean energy.

    Completions and energy are correlated subqueries so one member's tasks
    and logs never multiply each other.
    """
    completed_filter = [tasks.c.user_id == users.c.id, tasks.c.status == "completed"]
    energy_filter = [energy_logs.c.user_id == users.c.id]
    if since is not None:
        completed_filter.append(tasks.c.created_at >= since)
        energy_filter.append(energy_logs.c.logged_at >= since)
    completed = (
        select(func.count(tasks.c.id)).where(*completed_filter).scalar_subquery()
    ).label("completed_tasks")
    energy = (
        select(func.coalesce(func.avg(energy_logs.c.energy_level), 0))
        .where(*energy_filter)
        .scalar_subquery()
    ).label("energy_level")
    return (
        select(users.c.id.label("user_id"), users.c.name, completed, energy)
        .select_from(team_members.join(users, users.c.id == team_members.c.user_id))
        .where(
            team_members.c.team_id == team_id,
            team_members.c.status == MemberStatus.ACTIVE.value,
        )
        .order_by(completed.desc(), energy.desc())
        .limit(limit)
    )


def _local_hour(column: Any, timezone: str) -> Any:
    return cast(extract("hour", func.timezone(timezone, column)), Integer)


def hourly_energy_statement(team_id: UUID, since: datetime | None, timezone: str) -> Any:
    """Build mean energy per local hour of day across active members."""
    hour = _local_hour(energy_logs.c.logged_at, timezone).label("hour")
    statement = select(
        hour, func.avg(energy_logs.c.energy_level).label("average_energy")
    ).where(energy_logs.c.user_id.in_(_active_member_ids(team_id)))
    if since is not None:
        statement = statement.where(energy_logs.c.logged_at >= since)
    return statement.group_by(hour).order_by(hour)


def hourly_completions_statement(team_id: UUID, since: datetime | None, timezone: str) -> Any:
    """Build task completions per local hour of day across active members."""
    hour = _local_hour(tasks.c.completed_at, timezone).label("hour")
    statement = select(hour, func.count(tasks.c.id)).where(
        tasks.c.user_id.in_(_active_member_ids(team_id)),
        tasks.c.status == "completed",
    )
    if since is not None:
        statement = statement.where(tasks.c.completed_at >= since)
    return statement.group_by(hour)
