"""Swipe feed endpoints."""

import logging

from fastapi import APIRouter, Depends, Request

from petmatch.api.dependencies import get_container, http_error, require_user
from petmatch.api.models import FeedState, RespondRequest
from petmatch.domain.errors import (
    CandidateFetchError,
    NoCurrentCandidateError,
    ResponseEmissionError,
)
from petmatch.domain.models import UserIdentity
from petmatch.services.feed import SwipeSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feed", tags=["feed"])


@router.get("")
async def feed_state(
    request: Request, user: UserIdentity = Depends(require_user)
) -> FeedState:
    """Return the current candidate and session counters."""
    session = await _session_for(request, user)
    return FeedState.from_session(session)


@router.post("/respond")
async def respond(
    payload: RespondRequest,
    request: Request,
    user: UserIdentity = Depends(require_user),
) -> FeedState:
    """Record a like or dislike for the current candidate."""
    return await _respond(request, user, payload.liked)


@router.post("/like")
async def like(
    request: Request, user: UserIdentity = Depends(require_user)
) -> FeedState:
    """Record a like for the current candidate."""
    return await _respond(request, user, liked=True)


@router.post("/dislike")
async def dislike(
    request: Request, user: UserIdentity = Depends(require_user)
) -> FeedState:
    """Record a dislike for the current candidate."""
    return await _respond(request, user, liked=False)


@router.post("/reload")
async def reload(
    request: Request, user: UserIdentity = Depends(require_user)
) -> FeedState:
    """Fetch a fresh batch of candidates; the liked tally is kept."""
    container = get_container(request)
    session = container.feed_sessions.get(user.id)
    if session is None:
        session = await _session_for(request, user)
        return FeedState.from_session(session)
    try:
        await session.reload()
    except CandidateFetchError as exc:
        logger.exception("Feed reload failed", extra={"user_id": str(user.id)})
        raise http_error(exc) from exc
    return FeedState.from_session(session)


async def _session_for(request: Request, user: UserIdentity) -> SwipeSession:
    container = get_container(request)
    try:
        return await container.feed_sessions.get_or_start(user.id)
    except CandidateFetchError as exc:
        logger.exception("Initial feed fetch failed", extra={"user_id": str(user.id)})
        raise http_error(exc) from exc


async def _respond(request: Request, user: UserIdentity, liked: bool) -> FeedState:
    session = await _session_for(request, user)
    try:
        await session.respond(user.id, liked)
    except NoCurrentCandidateError as exc:
        raise http_error(exc) from exc
    except ResponseEmissionError as exc:
        logger.exception(
            "Failed to record swipe",
            extra={"user_id": str(user.id), "liked": liked},
        )
        raise http_error(exc) from exc
    return FeedState.from_session(session)
