"""Supabase-backed animal listing repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from pydantic import BaseModel, Field, ValidationError
from supabase import Client

from petmatch.domain.animals import Candidate
from petmatch.domain.errors import CandidateFetchError
from petmatch.services.feed import CandidateRepository

_COLUMNS = "id, name, species, breed, age, location, behavior, photo_url, created_at"


class AnimalRow(BaseModel):
    """Row shape of the animals table."""

    id: UUID
    name: str
    species: str
    breed: str | None = None
    age: int | None = Field(default=None, ge=0)
    location: str | None = None
    behavior: str | None = None
    photo_url: str | None = None
    created_at: datetime | None = None

    def to_candidate(self) -> Candidate:
        return Candidate(
            id=self.id,
            name=self.name,
            species=self.species,
            breed=self.breed,
            age=self.age,
            location=self.location,
            behavior=self.behavior,
            photo_url=self.photo_url,
        )


@dataclass
class SupabaseAnimalRepository(CandidateRepository):
    """Supabase implementation for reading animal listings."""

    client: Client

    def fetch_candidates(self, limit: int) -> list[Candidate]:
        """Return the newest animals, up to ``limit`` rows."""
        try:
            response = (
                self.client.table("animals")
                .select(_COLUMNS)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise CandidateFetchError("Failed to load animals") from exc
        try:
            return [
                AnimalRow.model_validate(row).to_candidate()
                for row in response.data or []
            ]
        except ValidationError as exc:
            raise CandidateFetchError("Received a malformed animal row") from exc
