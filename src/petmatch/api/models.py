"""Pydantic models for the JSON API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from petmatch.services.feed import SwipeSession


class SignupRequest(BaseModel):
    """Signup form payload."""

    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Login form payload."""

    email: str
    password: str


class IdentityOut(BaseModel):
    """Authenticated account summary."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    display_name: str | None = None


class AuthResult(BaseModel):
    """Result of a signup or login call."""

    user: IdentityOut
    signed_in: bool


class CandidateOut(BaseModel):
    """Animal listing shown in the feed."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    species: str
    breed: str | None = None
    age: int | None = None
    location: str | None = None
    behavior: str | None = None
    photo_url: str | None = None


class FeedState(BaseModel):
    """Snapshot of a user's swipe session."""

    current: CandidateOut | None
    exhausted: bool
    liked_count: int
    position: int
    total: int

    @classmethod
    def from_session(cls, session: SwipeSession) -> "FeedState":
        current = session.current()
        return cls(
            current=CandidateOut.model_validate(current) if current else None,
            exhausted=session.is_exhausted(),
            liked_count=session.liked_count,
            position=session.cursor,
            total=len(session.candidates),
        )


class RespondRequest(BaseModel):
    """Swipe gesture payload."""

    liked: bool


class ProfileOut(BaseModel):
    """Profile row returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    bio: str | None = None
    avatar_url: str | None = None
    location: str | None = None
    created_at: datetime | None = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, max_length=120)
    bio: str | None = None
    avatar_url: str | None = None
    location: str | None = Field(default=None, max_length=120)
