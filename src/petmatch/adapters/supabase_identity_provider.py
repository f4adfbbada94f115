"""Supabase Auth adapter."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urlencode
from uuid import UUID

from supabase import AuthError, Client

from petmatch.domain.errors import (
    DuplicateRegistrationError,
    IdentityError,
    InvalidCredentialsError,
    ProviderAuthError,
)
from petmatch.domain.models import AuthSession, UserIdentity
from petmatch.services.auth import IdentityProvider

logger = logging.getLogger(__name__)

_DUPLICATE_CODES = {"user_already_exists", "email_exists"}
_CREDENTIAL_CODES = {"invalid_credentials", "email_not_confirmed"}


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Supabase implementation of the identity operations.

    Auth calls keep session state on the client, so each operation runs on
    a fresh client from ``client_factory`` instead of a shared one.
    """

    client_factory: Callable[[], Client]
    supabase_url: str

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account with email and password."""
        client = self.client_factory()
        try:
            response = client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            if _error_code(exc) in _DUPLICATE_CODES or "already registered" in str(
                exc
            ):
                raise DuplicateRegistrationError(
                    "An account with this email already exists."
                ) from exc
            raise IdentityError(str(exc) or "Sign up failed.") from exc
        user = response.user
        if user is None:
            raise IdentityError("Sign up failed.")
        # With email confirmation on, an existing address yields a user
        # without identities instead of an error.
        if user.identities is not None and len(user.identities) == 0:
            raise DuplicateRegistrationError(
                "An account with this email already exists."
            )
        return _to_auth_session(user, response.session)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password."""
        client = self.client_factory()
        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            if _error_code(exc) in _CREDENTIAL_CODES or _error_status(exc) == 400:
                raise InvalidCredentialsError("Invalid email or password.") from exc
            raise IdentityError(str(exc) or "Sign in failed.") from exc
        if response.user is None or response.session is None:
            raise InvalidCredentialsError("Invalid email or password.")
        return _to_auth_session(response.user, response.session)

    def authorize_url(
        self, provider: str, redirect_to: str, code_challenge: str
    ) -> str:
        """Return the Supabase authorize URL for a PKCE provider flow."""
        query = urlencode(
            {
                "provider": provider,
                "redirect_to": redirect_to,
                "code_challenge": code_challenge,
                "code_challenge_method": "s256",
            }
        )
        return f"{self.supabase_url.rstrip('/')}/auth/v1/authorize?{query}"

    def exchange_code(self, auth_code: str, code_verifier: str) -> AuthSession:
        """Exchange a PKCE authorization code for a session."""
        client = self.client_factory()
        try:
            response = client.auth.exchange_code_for_session(
                {"auth_code": auth_code, "code_verifier": code_verifier}
            )
        except AuthError as exc:
            raise ProviderAuthError(str(exc) or "Provider sign in failed.") from exc
        if response.user is None or response.session is None:
            raise ProviderAuthError("Provider sign in failed.")
        return _to_auth_session(response.user, response.session)

    def get_user(self, access_token: str) -> UserIdentity | None:
        """Return the identity behind an access token, or None if invalid."""
        client = self.client_factory()
        try:
            response = client.auth.get_user(access_token)
        except AuthError as exc:
            logger.info("Rejected access token", extra={"reason": str(exc)})
            return None
        if response is None or response.user is None:
            return None
        return _to_identity(response.user)

    def sign_out(self, access_token: str) -> None:
        """Revoke all refresh tokens for the token's session."""
        client = self.client_factory()
        try:
            client.auth.admin.sign_out(access_token)
        except AuthError as exc:
            raise IdentityError("Sign out failed.") from exc


def _error_code(exc: AuthError) -> str | None:
    return getattr(exc, "code", None)


def _error_status(exc: AuthError) -> int | None:
    return getattr(exc, "status", None)


def _to_identity(user: object) -> UserIdentity:
    metadata = getattr(user, "user_metadata", None) or {}
    display_name = metadata.get("full_name") or metadata.get("name")
    return UserIdentity(
        id=UUID(str(user.id)),
        email=getattr(user, "email", None),
        display_name=display_name,
    )


def _to_auth_session(user: object, session: object | None) -> AuthSession:
    return AuthSession(
        user=_to_identity(user),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
    )
