"""Profile reads, partial updates and avatar uploads."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from petmatch.domain.errors import InvalidInputError, ProfileNotFoundError
from petmatch.domain.models import Profile

MAX_AVATAR_BYTES = 5 * 1024 * 1024
MAX_BIO_LENGTH = 500


class ProfileRepository(Protocol):
    """Persistence interface for profile rows."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user id, if present."""

    def create_profile(self, user_id: UUID, email: str, name: str) -> Profile:
        """Insert a profile row and return it."""

    def update_profile(self, user_id: UUID, updates: dict[str, object]) -> Profile:
        """Apply a partial update and return the stored profile."""


class AvatarStorage(Protocol):
    """Object storage interface for avatar images."""

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Store an object at the given path."""

    def public_url(self, path: str) -> str:
        """Return the public URL for a stored object."""


@dataclass
class ProfileService:
    """Service for profile lifecycle actions."""

    repository: ProfileRepository
    avatar_storage: AvatarStorage

    def get_profile(self, user_id: UUID) -> Profile:
        """Return the profile for a user."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return profile

    def update_profile(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
        location: str | None = None,
    ) -> Profile:
        """Update only the provided profile fields."""
        updates: dict[str, object] = {}
        if name is not None:
            cleaned = name.strip()
            if not cleaned:
                raise InvalidInputError("Name cannot be empty.")
            updates["name"] = cleaned
        if bio is not None:
            if len(bio) > MAX_BIO_LENGTH:
                raise InvalidInputError("Bio is too long.")
            updates["bio"] = bio
        if avatar_url is not None:
            updates["avatar_url"] = avatar_url
        if location is not None:
            updates["location"] = location.strip()
        if not updates:
            return self.get_profile(user_id)
        return self.repository.update_profile(user_id, updates)

    def upload_avatar(
        self, user_id: UUID, filename: str, content: bytes, content_type: str
    ) -> str:
        """Store an avatar image and return its public URL."""
        if not content:
            raise InvalidInputError("The uploaded file is empty.")
        if len(content) > MAX_AVATAR_BYTES:
            raise InvalidInputError("Avatar images must be 5 MB or smaller.")
        path = avatar_path(user_id, filename)
        self.avatar_storage.upload(path, content, content_type)
        return self.avatar_storage.public_url(path)

    def set_avatar(
        self, user_id: UUID, filename: str, content: bytes, content_type: str
    ) -> Profile:
        """Upload an avatar and store its URL on the profile."""
        url = self.upload_avatar(user_id, filename, content, content_type)
        return self.update_profile(user_id, avatar_url=url)


def avatar_path(user_id: UUID, filename: str) -> str:
    """Build a unique object path that keeps the file extension."""
    _, dot, extension = filename.rpartition(".")
    extension = extension.lower() if dot and extension else "bin"
    return f"{user_id}-{uuid4().hex}.{extension}"
