"""Identity flows backed by the hosted auth provider."""

import base64
import hashlib
import logging
import secrets
from dataclasses import dataclass, field
from typing import Protocol

from email_validator import EmailNotValidError, validate_email

from petmatch.domain.errors import InvalidInputError, ProviderAuthError
from petmatch.domain.models import AuthSession, FederatedRedirect, UserIdentity
from petmatch.services.profiles import ProfileRepository

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6
MAX_NAME_LENGTH = 120


class IdentityProvider(Protocol):
    """Interface for the hosted authentication service."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account and return the resulting session."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password."""

    def authorize_url(
        self, provider: str, redirect_to: str, code_challenge: str
    ) -> str:
        """Return the provider authorization URL for a PKCE flow."""

    def exchange_code(self, auth_code: str, code_verifier: str) -> AuthSession:
        """Exchange an authorization code for a session."""

    def get_user(self, access_token: str) -> UserIdentity | None:
        """Return the identity for an access token, if it is valid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""


@dataclass
class AuthService:
    """Application service for registration and sign in."""

    identity_provider: IdentityProvider
    profile_repository: ProfileRepository
    oauth_providers: frozenset[str] = field(
        default_factory=lambda: frozenset({"google"})
    )

    def register(self, email: str, password: str, name: str) -> AuthSession:
        """Create an account and its profile row."""
        normalized = normalize_email(email)
        if not is_valid_email(normalized):
            raise InvalidInputError("Enter a valid email address.")
        error = password_error(password)
        if error:
            raise InvalidInputError(error)
        cleaned_name = (name or "").strip()
        if not cleaned_name:
            raise InvalidInputError("Enter your name.")
        if len(cleaned_name) > MAX_NAME_LENGTH:
            raise InvalidInputError("Name is too long.")

        session = self.identity_provider.sign_up(normalized, password)
        self.profile_repository.create_profile(
            session.user.id, session.user.email or normalized, cleaned_name
        )
        logger.info("Registered account", extra={"user_id": str(session.user.id)})
        return session

    def authenticate(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        normalized = normalize_email(email)
        if not normalized or not password:
            raise InvalidInputError("Enter your email and password.")
        return self.identity_provider.sign_in(normalized, password)

    def start_federated_sign_in(
        self, provider: str, redirect_to: str
    ) -> FederatedRedirect:
        """Build the redirect for a federated provider sign in."""
        if provider not in self.oauth_providers:
            raise ProviderAuthError(f"Sign in with {provider} is not available.")
        verifier, challenge = generate_pkce_pair()
        url = self.identity_provider.authorize_url(provider, redirect_to, challenge)
        return FederatedRedirect(url=url, code_verifier=verifier)

    def complete_federated_sign_in(
        self, auth_code: str, code_verifier: str
    ) -> AuthSession:
        """Finish a federated sign in and make sure a profile exists."""
        if not auth_code or not code_verifier:
            raise ProviderAuthError("Sign in was interrupted. Please try again.")
        session = self.identity_provider.exchange_code(auth_code, code_verifier)
        self._ensure_profile(session.user)
        return session

    def current_user(self, access_token: str | None) -> UserIdentity | None:
        """Return the identity for an access token, if any."""
        if not access_token:
            return None
        return self.identity_provider.get_user(access_token)

    def end_session(self, access_token: str) -> None:
        """Revoke the session at the provider."""
        self.identity_provider.sign_out(access_token)

    def _ensure_profile(self, user: UserIdentity) -> None:
        if self.profile_repository.get_profile(user.id) is not None:
            return
        email = user.email or ""
        name = (user.display_name or "").strip() or email.split("@", 1)[0] or "Friend"
        self.profile_repository.create_profile(user.id, email, name)


def normalize_email(email: str | None) -> str:
    """Return a normalized email string for comparisons and storage."""
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    """Return True when an email address is syntactically valid."""
    if not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def password_error(password: str) -> str | None:
    """Return a validation error for password input, if any."""
    if len(password or "") < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters."
    return None


def generate_pkce_pair() -> tuple[str, str]:
    """Return a PKCE code verifier and its S256 challenge."""
    verifier = secrets.token_urlsafe(48)
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    challenge = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
    return verifier, challenge
