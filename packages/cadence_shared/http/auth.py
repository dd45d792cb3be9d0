"""Bearer access-token verification against the external identity provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol
from uuid import UUID

from fastapi import Request

from .client import HttpClient
from .errors import AuthenticationError, HttpStatusError, MissingHeaderError
from .server import get_header


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity claims resolved from one verified access token."""

    subject: str
    email: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved to a local user."""

    user_id: UUID
    subject: str
    email: str


PrincipalDependency = Callable[..., Principal]


class AccessTokenVerifier(Protocol):
    """Protocol for resolving a bearer token into a verified identity."""

    def verify(self, token: str) -> VerifiedIdentity:
        """Return verified identity or raise ``AuthenticationError``."""


class UserinfoAccessTokenVerifier:
    """Verify tokens by presenting them to the provider's userinfo endpoint.

    The provider rejects expired or forged tokens with 401/403, which map to
    ``AuthenticationError``. Other failures surface as ``HttpClientError``.
    """

    def __init__(self, *, http_client: HttpClient, userinfo_path: str = "/userinfo") -> None:
        self._http = http_client
        self._userinfo_path = userinfo_path

    def verify(self, token: str) -> VerifiedIdentity:
        try:
            claims = self._http.get_json(
                self._userinfo_path,
                headers={"Authorization": f"Bearer {token}"},
            )
        except HttpStatusError as exc:
            if exc.status_code in (401, 403):
                raise AuthenticationError(message="Invalid or expired token") from exc
            raise

        if not isinstance(claims, dict):
            raise AuthenticationError(message="Malformed identity claims")
        subject = claims.get("sub")
        if not isinstance(subject, str) or subject == "":
            raise AuthenticationError(message="Identity claims missing subject")
        return VerifiedIdentity(
            subject=subject,
            email=_optional_claim(claims, "email"),
            name=_optional_claim(claims, "name"),
        )


def bearer_token(request: Request) -> str:
    """Extract the bearer token from the ``Authorization`` header."""
    try:
        header = get_header(request, "Authorization")
    except MissingHeaderError:
        raise AuthenticationError(message="No token provided") from None
    scheme, _, token = (header or "").partition(" ")
    if scheme.lower() != "bearer" or token.strip() == "":
        raise AuthenticationError(message="No token provided")
    return token.strip()


def _optional_claim(claims: dict[str, object], name: str) -> str | None:
    value = claims.get(name)
    if isinstance(value, str) and value != "":
        return value
    return None
