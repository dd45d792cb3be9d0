"""Concrete Teams service implementation."""

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.clock import Clock
from packages.cadence_shared.config import TeamSettings
from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import codes, conflict_error, policy_error
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from resources.substrates.postgres import storage_failure
from services.productivity.teams.analytics import summarize_activity
from services.productivity.teams.component import SERVICE_COMPONENT_ID
from services.productivity.teams.domain import (
    INVITING_ROLES,
    MemberStatus,
    TeamAnalytics,
    TeamInviteRecord,
    TeamMemberRecord,
    TeamMemberView,
    TeamOptions,
    TeamRole,
    TeamView,
)
from services.productivity.teams.interfaces import NewInvite, NewTeam, TeamRepository
from services.productivity.teams.service import TeamService
from services.productivity.teams.validation import (
    CreateTeamRequest,
    InviteMemberRequest,
    TeamAnalyticsRequest,
)

_LOGGER = get_logger(__name__)
TOP_PERFORMER_LIMIT = 10
INVITE_TOKEN_BYTES = 24


class DefaultTeamService(TeamService):
    """Default Teams implementation backed by a ``TeamRepository``."""

    def __init__(
        self,
        *,
        repository: TeamRepository,
        settings: TeamSettings,
        clock: Clock,
    ) -> None:
        self._repository = repository
        self._settings = settings
        self._clock = clock

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def create_team(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[TeamView]:
        request, errors = validate_request(meta=meta, model=CreateTeamRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        supplied = {}
        if request.settings is not None:
            supplied = request.settings.model_dump(exclude_none=True)
        try:
            created = self._repository.create_team(
                owner_id=user_id,
                team=NewTeam(
                    name=request.name,
                    description=request.description,
                    settings=TeamOptions(**supplied),
                ),
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="create_team", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=TeamView(**created.model_dump(), member_count=1))

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "team_id"),
    )
    def get_team(
        self, *, meta: EnvelopeMeta, user_id: UUID, team_id: UUID
    ) -> Envelope[TeamView]:
        try:
            membership = self._repository.get_membership(team_id=team_id, user_id=user_id)
            if not _is_active(membership):
                return _not_a_member(meta, team_id)
            team = self._repository.get_team(team_id=team_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="get_team", exc=exc, logger=_LOGGER)
        if team is None:
            return _not_a_member(meta, team_id)
        return success(meta=meta, payload=team)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "team_id"),
    )
    def list_members(
        self, *, meta: EnvelopeMeta, user_id: UUID, team_id: UUID
    ) -> Envelope[list[TeamMemberView]]:
        try:
            membership = self._repository.get_membership(team_id=team_id, user_id=user_id)
            if not _is_active(membership):
                return _not_a_member(meta, team_id)
            members = self._repository.list_members(team_id=team_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="list_members", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=members)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "team_id"),
    )
    def invite_member(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        team_id: UUID,
        data: Mapping[str, Any],
    ) -> Envelope[TeamInviteRecord]:
        request, errors = validate_request(meta=meta, model=InviteMemberRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            membership = self._repository.get_membership(team_id=team_id, user_id=user_id)
            if not _is_active(membership):
                return _not_a_member(meta, team_id)
            assert membership is not None
            if membership.role not in INVITING_ROLES:
                return _forbidden(meta, "Insufficient permissions to invite members", team_id)
            team = self._repository.get_team(team_id=team_id)
            if team is None:
                return _not_a_member(meta, team_id)

            role = request.role if request.role is not None else team.settings.default_member_role
            if role == TeamRole.OWNER and membership.role != TeamRole.OWNER:
                return _forbidden(meta, "Only owners can invite owners", team_id)
            if team.member_count >= team.settings.max_members:
                return failure(
                    meta=meta,
                    errors=[
                        conflict_error(
                            "Team is full",
                            code=codes.INVALID_STATE,
                            metadata={
                                "team_id": str(team_id),
                                "max_members": str(team.settings.max_members),
                            },
                        )
                    ],
                )

            invite = self._repository.create_invite(
                invite=NewInvite(
                    team_id=team_id,
                    email=request.email,
                    invited_by=user_id,
                    role=role,
                    token=secrets.token_urlsafe(INVITE_TOKEN_BYTES),
                    expires_at=self._clock.now()
                    + timedelta(days=self._settings.invite_ttl_days),
                )
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="invite_member", exc=exc, logger=_LOGGER)
        _LOGGER.info("team invitation issued: team_id=%s role=%s", team_id, role.value)
        return success(meta=meta, payload=invite)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("user_id", "team_id"),
    )
    def get_team_analytics(
        self,
        *,
        meta: EnvelopeMeta,
        user_id: UUID,
        team_id: UUID,
        period: str = "week",
    ) -> Envelope[TeamAnalytics]:
        request, errors = validate_request(
            meta=meta, model=TeamAnalyticsRequest, payload={"period": period}
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        window = request.period.window
        since = None if window is None else self._clock.now() - window
        try:
            membership = self._repository.get_membership(team_id=team_id, user_id=user_id)
            if not _is_active(membership):
                return _not_a_member(meta, team_id)
            team = self._repository.get_team(team_id=team_id)
            if team is None:
                return _not_a_member(meta, team_id)
            activity = self._repository.team_activity(
                team_id=team_id,
                since=since,
                timezone=team.settings.timezone,
                limit=TOP_PERFORMER_LIMIT,
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_team_analytics", exc=exc, logger=_LOGGER
            )
        return success(meta=meta, payload=summarize_activity(team_id, request.period, activity))


def _is_active(membership: TeamMemberRecord | None) -> bool:
    return membership is not None and membership.status == MemberStatus.ACTIVE


def _not_a_member(meta: EnvelopeMeta, team_id: UUID) -> Envelope[Any]:
    return _forbidden(meta, "Not a member of this team", team_id)


def _forbidden(meta: EnvelopeMeta, message: str, team_id: UUID) -> Envelope[Any]:
    return failure(
        meta=meta,
        errors=[
            policy_error(
                message,
                code=codes.PERMISSION_DENIED,
                metadata={"team_id": str(team_id)},
            )
        ],
    )
