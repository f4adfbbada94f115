"""Swipe feed session state machine."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from petmatch.domain.animals import Candidate
from petmatch.domain.errors import NoCurrentCandidateError
from petmatch.domain.matches import SwipeResponse

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class CandidateRepository(Protocol):
    """Read interface for animal listings."""

    def fetch_candidates(self, limit: int) -> list[Candidate]:
        """Return up to ``limit`` candidates, newest first."""


class MatchRepository(Protocol):
    """Write interface for swipe responses."""

    def record_response(
        self, user_id: UUID, animal_id: UUID, liked: bool
    ) -> SwipeResponse:
        """Persist one like/dislike event and return the stored record."""


@dataclass
class SwipeSession:
    """Sequences a fetched batch of candidates one swipe at a time.

    The cursor only moves forward, one step per acknowledged response, and
    is reset to zero when a new batch is loaded. ``liked_count`` is a running
    tally for the whole browsing pass and survives reloads.
    """

    candidate_repository: CandidateRepository
    match_repository: MatchRepository
    page_size: int = DEFAULT_PAGE_SIZE
    candidates: list[Candidate] = field(default_factory=list)
    cursor: int = 0
    liked_count: int = 0

    def load(self, batch: Iterable[Candidate]) -> None:
        """Replace the candidate sequence and rewind the cursor."""
        self.candidates = list(batch)
        self.cursor = 0

    def current(self) -> Candidate | None:
        """Return the candidate awaiting a decision, if any."""
        if self.is_exhausted():
            return None
        return self.candidates[self.cursor]

    def is_exhausted(self) -> bool:
        """Return True when every loaded candidate has a response."""
        return self.cursor >= len(self.candidates)

    async def respond(self, user_id: UUID, liked: bool) -> SwipeResponse:
        """Record a response for the current candidate and advance.

        State only changes after the match repository acknowledges the
        write; any error it raises propagates with cursor and counter intact.
        """
        candidate = self.current()
        if candidate is None:
            raise NoCurrentCandidateError("No candidate left to respond to")
        response = await asyncio.to_thread(
            self.match_repository.record_response, user_id, candidate.id, liked
        )
        if liked:
            self.liked_count += 1
        self.cursor += 1
        return response

    async def like(self, user_id: UUID) -> SwipeResponse:
        """Record a positive response for the current candidate."""
        return await self.respond(user_id, liked=True)

    async def dislike(self, user_id: UUID) -> SwipeResponse:
        """Record a negative response for the current candidate."""
        return await self.respond(user_id, liked=False)

    async def reload(self) -> list[Candidate]:
        """Fetch a fresh batch and load it, keeping the liked tally."""
        batch = await asyncio.to_thread(
            self.candidate_repository.fetch_candidates, self.page_size
        )
        self.load(batch)
        logger.info("Loaded feed batch", extra={"size": len(self.candidates)})
        return self.candidates
