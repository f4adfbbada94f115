"""Domain models for animal listings shown in the feed."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Candidate:
    """Represents one animal listing presented for a swipe decision."""

    id: UUID
    name: str
    species: str
    breed: str | None = None
    age: int | None = None
    location: str | None = None
    behavior: str | None = None
    photo_url: str | None = None
