"""Profile endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from petmatch.api.dependencies import get_container, http_error, require_user
from petmatch.api.models import ProfileOut, ProfileUpdateRequest
from petmatch.domain.errors import PetMatchError
from petmatch.domain.models import UserIdentity

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
def read_profile(
    request: Request, user: UserIdentity = Depends(require_user)
) -> ProfileOut:
    """Return the signed-in user's profile."""
    container = get_container(request)
    try:
        profile = container.profile_service.get_profile(user.id)
    except PetMatchError as exc:
        raise http_error(exc) from exc
    return ProfileOut.model_validate(profile)


@router.patch("")
def update_profile(
    payload: ProfileUpdateRequest,
    request: Request,
    user: UserIdentity = Depends(require_user),
) -> ProfileOut:
    """Update the provided profile fields."""
    container = get_container(request)
    try:
        profile = container.profile_service.update_profile(
            user.id, **payload.model_dump(exclude_unset=True)
        )
    except PetMatchError as exc:
        raise http_error(exc) from exc
    return ProfileOut.model_validate(profile)


@router.put("/avatar")
async def upload_avatar(
    request: Request,
    filename: str = Query(min_length=1, max_length=200),
    user: UserIdentity = Depends(require_user),
) -> ProfileOut:
    """Upload the raw request body as the user's avatar."""
    container = get_container(request)
    content = await request.body()
    content_type = request.headers.get("content-type", "application/octet-stream")
    try:
        profile = container.profile_service.set_avatar(
            user.id, filename, content, content_type
        )
    except PetMatchError as exc:
        raise http_error(exc) from exc
    return ProfileOut.model_validate(profile)
