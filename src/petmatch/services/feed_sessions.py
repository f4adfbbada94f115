"""Per-user registry of live feed sessions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from petmatch.services.feed import (
    DEFAULT_PAGE_SIZE,
    CandidateRepository,
    MatchRepository,
    SwipeSession,
)


@dataclass
class _SessionEntry:
    session: SwipeSession
    expires_at: datetime


@dataclass
class FeedSessionStore:
    """In-memory store holding one swipe session per signed-in user."""

    candidate_repository: CandidateRepository
    match_repository: MatchRepository
    page_size: int
    ttl_seconds: int
    _entries: dict[UUID, _SessionEntry]

    def __init__(
        self,
        candidate_repository: CandidateRepository,
        match_repository: MatchRepository,
        page_size: int = DEFAULT_PAGE_SIZE,
        ttl_seconds: int = 3600,
    ) -> None:
        self.candidate_repository = candidate_repository
        self.match_repository = match_repository
        self.page_size = page_size
        self.ttl_seconds = ttl_seconds
        self._entries = {}

    def get(self, user_id: UUID) -> SwipeSession | None:
        """Return the live session for a user and refresh its expiry."""
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        now = datetime.now(tz=UTC)
        if now >= entry.expires_at:
            self._entries.pop(user_id, None)
            return None
        entry.expires_at = now + timedelta(seconds=self.ttl_seconds)
        return entry.session

    async def get_or_start(self, user_id: UUID) -> SwipeSession:
        """Return the user's session, starting and loading one if needed.

        A new session is stored before its first fetch, so a failed fetch
        leaves an empty session that the caller can reload later.
        """
        session = self.get(user_id)
        if session is not None:
            return session
        self.purge_expired()
        session = SwipeSession(
            candidate_repository=self.candidate_repository,
            match_repository=self.match_repository,
            page_size=self.page_size,
        )
        self._entries[user_id] = _SessionEntry(
            session=session,
            expires_at=datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds),
        )
        await session.reload()
        return session

    def discard(self, user_id: UUID) -> None:
        """Drop the session for a user, if any."""
        self._entries.pop(user_id, None)

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        now = datetime.now(tz=UTC)
        expired = [
            user_id
            for user_id, entry in self._entries.items()
            if now >= entry.expires_at
        ]
        for user_id in expired:
            del self._entries[user_id]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
