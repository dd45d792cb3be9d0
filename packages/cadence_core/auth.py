"""Request authentication: bearer token to verified identity to local user."""

from __future__ import annotations

from fastapi import Request

from packages.cadence_shared.envelope import EnvelopeKind
from packages.cadence_shared.errors import ErrorCategory
from packages.cadence_shared.http import (
    AccessTokenVerifier,
    AuthenticationError,
    Principal,
    PrincipalDependency,
    bearer_token,
    request_meta,
)
from packages.cadence_shared.logging import get_logger
from services.productivity.users import UserService

_LOGGER = get_logger(__name__)


class IdentitySyncError(Exception):
    """Verified caller could not be resolved to a local user."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def build_current_principal(
    *, verifier: AccessTokenVerifier, users: UserService
) -> PrincipalDependency:
    """Build the FastAPI dependency that authenticates each request."""

    def current_principal(request: Request) -> Principal:
        identity = verifier.verify(bearer_token(request))
        meta = request_meta(request, principal=identity.subject, kind=EnvelopeKind.COMMAND)
        result = users.sync_identity(
            meta=meta, subject=identity.subject, email=identity.email, name=identity.name
        )
        if not result.ok:
            first = result.errors[0]
            _LOGGER.warning("identity sync failed: code=%s", first.code)
            if first.category == ErrorCategory.VALIDATION:
                raise AuthenticationError(message="Identity claims rejected")
            raise IdentitySyncError("User lookup failed", status_code=503)
        assert result.value is not None
        return Principal(
            user_id=result.value.id,
            subject=identity.subject,
            email=result.value.email,
        )

    return current_principal
