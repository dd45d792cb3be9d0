"""Concrete Users service implementation."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from packages.cadence_shared.envelope import Envelope, EnvelopeMeta, failure, success
from packages.cadence_shared.errors import codes, conflict_error, not_found_error
from packages.cadence_shared.logging import get_logger, public_api_instrumented
from packages.cadence_shared.validation import validate_request
from resources.substrates.postgres import storage_failure
from services.productivity.users.component import SERVICE_COMPONENT_ID
from services.productivity.users.domain import (
    DEFAULT_TIMEZONE,
    DEFAULT_USER_NAME,
    NOTIFICATIONS_PREFERENCE_KEY,
    PLACEHOLDER_EMAIL_DOMAIN,
    NotificationPreferences,
    UserRecord,
    notification_preferences,
)
from services.productivity.users.interfaces import UserRepository, UserUpdate
from services.productivity.users.service import UserService
from services.productivity.users.validation import (
    CreateUserRequest,
    ListUsersRequest,
    SyncIdentityRequest,
    UpdateNotificationPreferencesRequest,
    UpdateUserRequest,
)

_LOGGER = get_logger(__name__)


class DefaultUserService(UserService):
    """Default Users implementation backed by a ``UserRepository``."""

    def __init__(self, *, repository: UserRepository) -> None:
        self._repository = repository

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def create_user(
        self, *, meta: EnvelopeMeta, data: Mapping[str, Any]
    ) -> Envelope[UserRecord]:
        request, errors = validate_request(meta=meta, model=CreateUserRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            if self._repository.get_user_by_email(email=request.email) is not None:
                return failure(
                    meta=meta,
                    errors=[
                        conflict_error(
                            "User with this email already exists",
                            code=codes.ALREADY_EXISTS,
                        )
                    ],
                )
            created = self._repository.create_user(
                email=request.email,
                name=request.name,
                avatar_url=request.avatar_url,
                timezone=request.timezone if request.timezone is not None else DEFAULT_TIMEZONE,
                auth_subject=None,
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="create_user", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_user(self, *, meta: EnvelopeMeta, user_id: UUID) -> Envelope[UserRecord]:
        try:
            user = self._repository.get_user(user_id=user_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="get_user", exc=exc, logger=_LOGGER)
        if user is None:
            return _user_not_found(meta, user_id)
        return success(meta=meta, payload=user)

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def list_users(
        self, *, meta: EnvelopeMeta, limit: int = 100, offset: int = 0
    ) -> Envelope[list[UserRecord]]:
        request, errors = validate_request(
            meta=meta,
            model=ListUsersRequest,
            payload={"limit": limit, "offset": offset},
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None
        try:
            rows = self._repository.list_users(limit=request.limit, offset=request.offset)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="list_users", exc=exc, logger=_LOGGER)
        return success(meta=meta, payload=rows)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def update_user(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[UserRecord]:
        request, errors = validate_request(meta=meta, model=UpdateUserRequest, payload=data)
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        supplied = request.model_fields_set
        update = UserUpdate(
            **{
                name: getattr(request, name)
                for name in ("name", "avatar_url", "timezone")
                if name in supplied
            }
        )
        try:
            updated = self._repository.update_user(user_id=user_id, update=update)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="update_user", exc=exc, logger=_LOGGER)
        if updated is None:
            return _user_not_found(meta, user_id)
        return success(meta=meta, payload=updated)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def delete_user(self, *, meta: EnvelopeMeta, user_id: UUID) -> Envelope[bool]:
        try:
            deleted = self._repository.delete_user(user_id=user_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="delete_user", exc=exc, logger=_LOGGER)
        if not deleted:
            return _user_not_found(meta, user_id)
        return success(meta=meta, payload=True)

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def sync_identity(
        self,
        *,
        meta: EnvelopeMeta,
        subject: str,
        email: str | None = None,
        name: str | None = None,
    ) -> Envelope[UserRecord]:
        """Resolve by subject, then link by email, then create.

        Missing claims fall back to a placeholder email derived from the
        subject and a generic display name.
        """
        request, errors = validate_request(
            meta=meta,
            model=SyncIdentityRequest,
            payload={"subject": subject, "email": email, "name": name},
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            existing = self._repository.get_user_by_subject(auth_subject=request.subject)
            if existing is not None:
                return success(meta=meta, payload=existing)

            if request.email is not None:
                by_email = self._repository.get_user_by_email(email=request.email)
                if by_email is not None:
                    linked = self._repository.update_user(
                        user_id=by_email.id,
                        update=UserUpdate(auth_subject=request.subject),
                    )
                    return success(meta=meta, payload=linked if linked is not None else by_email)

            created = self._repository.create_user(
                email=(
                    request.email
                    if request.email is not None
                    else f"user-{request.subject}@{PLACEHOLDER_EMAIL_DOMAIN}"
                ),
                name=request.name if request.name is not None else DEFAULT_USER_NAME,
                avatar_url=None,
                timezone=DEFAULT_TIMEZONE,
                auth_subject=request.subject,
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(meta=meta, operation="sync_identity", exc=exc, logger=_LOGGER)
        _LOGGER.info(
            "Provisioned user for new identity subject", extra={"user_id": str(created.id)}
        )
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def get_notification_preferences(
        self, *, meta: EnvelopeMeta, user_id: UUID
    ) -> Envelope[NotificationPreferences]:
        try:
            user = self._repository.get_user(user_id=user_id)
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="get_notification_preferences", exc=exc, logger=_LOGGER
            )
        if user is None:
            return _user_not_found(meta, user_id)
        return success(meta=meta, payload=notification_preferences(user))

    @public_api_instrumented(
        logger=_LOGGER, component_id=SERVICE_COMPONENT_ID, id_fields=("user_id",)
    )
    def update_notification_preferences(
        self, *, meta: EnvelopeMeta, user_id: UUID, data: Mapping[str, Any]
    ) -> Envelope[NotificationPreferences]:
        request, errors = validate_request(
            meta=meta, model=UpdateNotificationPreferencesRequest, payload=data
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert request is not None

        try:
            user = self._repository.get_user(user_id=user_id)
            if user is None:
                return _user_not_found(meta, user_id)
            merged = notification_preferences(user).model_copy(
                update=request.model_dump(exclude_none=True)
            )
            preferences = {
                **user.preferences,
                NOTIFICATIONS_PREFERENCE_KEY: merged.model_dump(mode="json"),
            }
            updated = self._repository.update_user(
                user_id=user_id, update=UserUpdate(preferences=preferences)
            )
        except Exception as exc:  # noqa: BLE001
            return storage_failure(
                meta=meta, operation="update_notification_preferences", exc=exc, logger=_LOGGER
            )
        if updated is None:
            return _user_not_found(meta, user_id)
        return success(meta=meta, payload=notification_preferences(updated))


def _user_not_found(meta: EnvelopeMeta, user_id: UUID) -> Envelope[Any]:
    return failure(
        meta=meta,
        errors=[
            not_found_error(
                "User not found",
                code=codes.RESOURCE_NOT_FOUND,
                metadata={"user_id": str(user_id)},
            )
        ],
    )
