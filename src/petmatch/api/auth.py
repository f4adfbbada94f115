"""Signup, login and federated sign-in endpoints."""

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, Request, Response, status
from fastapi.responses import RedirectResponse

from petmatch.api.dependencies import (
    PKCE_COOKIE_MAX_AGE_SECONDS,
    PKCE_COOKIE_NAME,
    SESSION_COOKIE_NAME,
    clear_session_cookie,
    get_container,
    http_error,
    optional_user,
    require_user,
    set_session_cookie,
)
from petmatch.api.models import AuthResult, IdentityOut, LoginRequest, SignupRequest
from petmatch.domain.errors import IdentityError, PetMatchError
from petmatch.domain.models import AuthSession, UserIdentity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/api/auth/signup", status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, request: Request, response: Response) -> AuthResult:
    """Create an account and sign in when the provider issues a session."""
    container = get_container(request)
    try:
        session = container.auth_service.register(
            payload.email, payload.password, payload.name
        )
    except PetMatchError as exc:
        logger.warning("Signup failed", extra={"reason": str(exc)})
        raise http_error(exc) from exc
    if session.access_token:
        set_session_cookie(response, session.access_token, container.settings)
    return _auth_result(session)


@router.post("/api/auth/login")
def login(payload: LoginRequest, request: Request, response: Response) -> AuthResult:
    """Sign in with email and password."""
    container = get_container(request)
    try:
        session = container.auth_service.authenticate(payload.email, payload.password)
    except PetMatchError as exc:
        raise http_error(exc) from exc
    if session.access_token:
        set_session_cookie(response, session.access_token, container.settings)
    return _auth_result(session)


@router.post("/api/auth/logout")
def logout(
    request: Request,
    response: Response,
    user: UserIdentity | None = Depends(optional_user),
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
) -> dict[str, str]:
    """Revoke the session and forget the user's feed."""
    container = get_container(request)
    if session_token:
        try:
            container.auth_service.end_session(session_token)
        except IdentityError:
            logger.warning("Failed to revoke session at provider", exc_info=True)
    if user is not None:
        container.feed_sessions.discard(user.id)
    clear_session_cookie(response)
    return {"status": "ok"}


@router.get("/api/me")
def me(user: UserIdentity = Depends(require_user)) -> IdentityOut:
    """Return the signed-in identity."""
    return IdentityOut.model_validate(user)


@router.get("/api/auth/oauth/{provider}")
def oauth_start(provider: str, request: Request) -> RedirectResponse:
    """Redirect to a federated provider and remember the PKCE verifier."""
    container = get_container(request)
    redirect_to = f"{container.settings.public_base_url.rstrip('/')}/auth/callback"
    try:
        redirect = container.auth_service.start_federated_sign_in(
            provider, redirect_to
        )
    except PetMatchError as exc:
        raise http_error(exc) from exc
    response = RedirectResponse(redirect.url, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        PKCE_COOKIE_NAME,
        redirect.code_verifier,
        max_age=PKCE_COOKIE_MAX_AGE_SECONDS,
        httponly=True,
        secure=container.settings.session_cookie_secure,
        samesite="lax",
    )
    return response


@router.get("/auth/callback")
def oauth_callback(
    request: Request,
    code: str | None = None,
    error_description: str | None = None,
    code_verifier: str | None = Cookie(default=None, alias=PKCE_COOKIE_NAME),
) -> RedirectResponse:
    """Complete a federated sign in and land on the feed."""
    container = get_container(request)
    if not code:
        message = error_description or "Sign in was cancelled."
        return _auth_page_redirect(message)
    try:
        session = container.auth_service.complete_federated_sign_in(
            code, code_verifier or ""
        )
    except PetMatchError as exc:
        logger.warning("Federated sign in failed", extra={"reason": str(exc)})
        return _auth_page_redirect(str(exc))
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(PKCE_COOKIE_NAME)
    if session.access_token:
        set_session_cookie(response, session.access_token, container.settings)
    return response


def _auth_result(session: AuthSession) -> AuthResult:
    return AuthResult(
        user=IdentityOut.model_validate(session.user),
        signed_in=session.access_token is not None,
    )


def _auth_page_redirect(message: str) -> RedirectResponse:
    query = urlencode({"message": message})
    response = RedirectResponse(
        f"/auth?{query}", status_code=status.HTTP_303_SEE_OTHER
    )
    response.delete_cookie(PKCE_COOKIE_NAME)
    return response
