"""Request-scoped dependencies: wired services and the bearer-token check."""
from __future__ import annotations

from fastapi import Request

from profile_api.core.errors import NotAuthenticated
from profile_api.core.security import CredentialHelper
from profile_api.services.profile_service import ProfileService

BEARER_PREFIX = "Bearer "


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_credentials(request: Request) -> CredentialHelper:
    return request.app.state.credentials


def bearer_token(request: Request) -> str:
    header = request.headers.get("authorization") or ""
    if not header.startswith(BEARER_PREFIX):
        raise NotAuthenticated()
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise NotAuthenticated()
    return token


def current_profile_id(request: Request) -> str:
    """Return the profile id carried by the request's bearer token.

    Missing or non-Bearer Authorization -> NotAuthenticated; a token that fails
    verification -> InvalidToken (raised by the credential helper).
    """
    return get_credentials(request).verify_token(bearer_token(request))
