"""Supabase-backed swipe response repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from petmatch.domain.errors import ResponseEmissionError
from petmatch.domain.matches import SwipeResponse
from petmatch.services.feed import MatchRepository


@dataclass
class SupabaseMatchRepository(MatchRepository):
    """Supabase implementation for recording likes and dislikes."""

    client: Client

    def record_response(
        self, user_id: UUID, animal_id: UUID, liked: bool
    ) -> SwipeResponse:
        """Insert a matches row and return it."""
        try:
            response = (
                self.client.table("matches")
                .insert(
                    {
                        "user_id": str(user_id),
                        "animal_id": str(animal_id),
                        "liked": liked,
                    }
                )
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise ResponseEmissionError("Failed to record response") from exc
        if not response.data:
            raise ResponseEmissionError("Failed to record response")
        row = response.data[0]
        created_at = row.get("created_at")
        return SwipeResponse(
            id=UUID(row["id"]),
            user_id=UUID(row["user_id"]),
            animal_id=UUID(row["animal_id"]),
            liked=bool(row["liked"]),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
