"""Domain models for recorded swipe responses."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SwipeResponse:
    """Represents a like/dislike event stored in the matches table."""

    id: UUID
    user_id: UUID
    animal_id: UUID
    liked: bool
    created_at: datetime | None = None
