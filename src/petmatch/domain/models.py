"""Domain models for identities and profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserIdentity:
    """Represents an authenticated account."""

    id: UUID
    email: str | None
    display_name: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Represents the result of a sign-up or sign-in call.

    ``access_token`` is ``None`` when the provider created the account but
    is waiting for email confirmation before issuing a session.
    """

    user: UserIdentity
    access_token: str | None
    refresh_token: str | None = None


@dataclass(frozen=True)
class FederatedRedirect:
    """Redirect target and PKCE verifier for a federated sign in."""

    url: str
    code_verifier: str


@dataclass(frozen=True)
class Profile:
    """Represents a row of the profiles table."""

    id: UUID
    email: str
    name: str
    bio: str | None = None
    avatar_url: str | None = None
    location: str | None = None
    created_at: datetime | None = None
