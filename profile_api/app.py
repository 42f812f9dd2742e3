"""FastAPI application for the Profile API."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from profile_api.core.config import Settings, get_settings
from profile_api.core.errors import (
    DataConflict,
    GetProfileFailed,
    InvalidCredentials,
    InvalidRequest,
    InvalidToken,
    LoginFailed,
    NotAuthenticated,
    ProfileError,
    ProfileNotFound,
    RegistrationFailed,
    UpdateProfileFailed,
)
from profile_api.core.logger import setup_logging
from profile_api.core.security import CredentialHelper
from profile_api.repositories.profile_repository import ProfileRepository, SQLProfileRepository
from profile_api.routers import profiles as profiles_router
from profile_api.schemas import ErrorResponse
from profile_api.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[ProfileError], int] = {
    RegistrationFailed: 500,
    DataConflict: 409,
    ProfileNotFound: 404,
    GetProfileFailed: 500,
    InvalidCredentials: 400,
    LoginFailed: 500,
    UpdateProfileFailed: 500,
    NotAuthenticated: 403,
    InvalidToken: 400,
    InvalidRequest: 400,
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def status_for(exc: ProfileError) -> int:
    return STATUS_BY_ERROR.get(type(exc), 500)


def _error_response(message: str, status: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(message=message).model_dump(), status_code=status)


async def _profile_error_handler(request: Request, exc: ProfileError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s -> %s (%s)", request.method, request.url.path, exc.code, exc.__cause__ or exc)
    return _error_response(exc.message, status)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    invalid = InvalidRequest(errors[0].get("msg") if errors else None)
    return await _profile_error_handler(request, invalid)


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Reaches here only when a commit fails; lookups and writes are classified by the service.
    logger.error("%s %s -> store failure: %s", request.method, request.url.path, exc)
    return _error_response("internal server error", 500)


def create_app(
    settings: Settings | None = None,
    *,
    repository: ProfileRepository | None = None,
    credentials: CredentialHelper | None = None,
) -> FastAPI:
    """Build the app with its collaborators; tests inject their own store/helper."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    credentials = credentials or CredentialHelper.from_settings(settings)
    repository = repository or SQLProfileRepository(settings)

    app = FastAPI(title="Profile API")
    app.state.credentials = credentials
    app.state.profile_service = ProfileService(repository=repository, credentials=credentials)

    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(ProfileError, _profile_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(profiles_router.router)
    return app
