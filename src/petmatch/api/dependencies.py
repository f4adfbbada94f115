"""Shared FastAPI dependencies and session cookie helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Cookie, Depends, HTTPException, Request, Response, status

from petmatch.domain.errors import (
    AvatarUploadError,
    CandidateFetchError,
    DuplicateRegistrationError,
    InvalidCredentialsError,
    InvalidInputError,
    NoCurrentCandidateError,
    PetMatchError,
    ProfileNotFoundError,
    ProviderAuthError,
)
from petmatch.domain.models import UserIdentity

if TYPE_CHECKING:
    from petmatch.config import Settings
    from petmatch.containers import AppContainer

SESSION_COOKIE_NAME = "petmatch_session"
PKCE_COOKIE_NAME = "petmatch_pkce"
SESSION_COOKIE_MAX_AGE_SECONDS = 60 * 60 * 24 * 7
PKCE_COOKIE_MAX_AGE_SECONDS = 60 * 10

_STATUS_BY_ERROR: tuple[tuple[type[PetMatchError], int], ...] = (
    (InvalidInputError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (DuplicateRegistrationError, status.HTTP_409_CONFLICT),
    (ProviderAuthError, status.HTTP_400_BAD_REQUEST),
    (NoCurrentCandidateError, status.HTTP_409_CONFLICT),
    (ProfileNotFoundError, status.HTTP_404_NOT_FOUND),
    (CandidateFetchError, status.HTTP_502_BAD_GATEWAY),
    (AvatarUploadError, status.HTTP_502_BAD_GATEWAY),
)


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def optional_user(
    request: Request,
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
) -> UserIdentity | None:
    """Resolve the signed-in user from the session cookie, if any."""
    container = get_container(request)
    return container.auth_service.current_user(session_token)


def require_user(
    user: UserIdentity | None = Depends(optional_user),
) -> UserIdentity:
    """Ensure the request carries a valid session."""
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user


def http_error(exc: PetMatchError) -> HTTPException:
    """Map a domain error to an HTTP error with a user-facing detail."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Store the access token in an HTTP-only cookie."""
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie."""
    response.delete_cookie(SESSION_COOKIE_NAME)
