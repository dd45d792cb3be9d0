"""Public shared HTTP API for Cadence packages."""

from .auth import (
    AccessTokenVerifier,
    Principal,
    PrincipalDependency,
    UserinfoAccessTokenVerifier,
    VerifiedIdentity,
    bearer_token,
)
from .client import HttpClient
from .errors import (
    AuthenticationError,
    HttpClientError,
    HttpError,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpServerError,
    HttpStatusError,
    MissingHeaderError,
)
from .responses import envelope_response, error_body, status_for_errors
from .server import create_app, get_header, request_meta, run_app

__all__ = [
    "AccessTokenVerifier",
    "AuthenticationError",
    "HttpClient",
    "HttpClientError",
    "HttpError",
    "HttpJsonDecodeError",
    "HttpRequestError",
    "HttpServerError",
    "HttpStatusError",
    "MissingHeaderError",
    "Principal",
    "PrincipalDependency",
    "UserinfoAccessTokenVerifier",
    "VerifiedIdentity",
    "bearer_token",
    "create_app",
    "envelope_response",
    "error_body",
    "get_header",
    "request_meta",
    "run_app",
    "status_for_errors",
]
