"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from petmatch.domain.errors import ProfileError
from petmatch.domain.models import Profile
from petmatch.services.profiles import ProfileRepository

_COLUMNS = "id, email, name, bio, avatar_url, location, created_at"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user id, if present."""
        try:
            response = (
                self.client.table("profiles")
                .select(_COLUMNS)
                .eq("id", str(user_id))
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise ProfileError("Failed to load profile") from exc
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, user_id: UUID, email: str, name: str) -> Profile:
        """Create a profile row and return it."""
        try:
            response = (
                self.client.table("profiles")
                .insert({"id": str(user_id), "email": email, "name": name})
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise ProfileError("Failed to create profile") from exc
        if not response.data:
            raise ProfileError("Failed to create profile")
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, updates: dict[str, object]) -> Profile:
        """Apply a partial update to a profile row."""
        try:
            response = (
                self.client.table("profiles")
                .update(updates)
                .eq("id", str(user_id))
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise ProfileError("Failed to update profile") from exc
        if not response.data:
            raise ProfileError("Failed to update profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> Profile:
    created_at = row.get("created_at")
    return Profile(
        id=UUID(str(row["id"])),
        email=str(row.get("email") or ""),
        name=str(row.get("name") or ""),
        bio=row.get("bio"),
        avatar_url=row.get("avatar_url"),
        location=row.get("location"),
        created_at=datetime.fromisoformat(str(created_at)) if created_at else None,
    )
