"""Profile API routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.profile import (
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
)
from domain.entities.profile import Profile
from domain.services.profile_service import PROFILE_UPDATED_MESSAGE, ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_response(profile: Profile, email: str) -> ProfileResponse:
    """Email comes from the session; it is never stored on the profile."""
    return ProfileResponse(
        id=profile.id,
        email=email,
        username=profile.username,
        college=profile.college,
        avatar_url=profile.avatar_url,
        created_at=profile.created_at,
    )


@router.get(
    "",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
)
async def get_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Load the signed-in user's profile, creating an empty one on first visit."""
    profile = await service.ensure_profile(user.id, user.username)
    return ProfileDetailResponse(data=_to_response(profile, user.email))


@router.put(
    "",
    response_model=ProfileUpdateResponse,
    summary="Update own profile",
    responses={
        200: {"description": "Profile updated successfully"},
        404: {"description": "Profile not found"},
        500: {"description": "Backend rejected the update"},
    },
)
async def update_profile(
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileUpdateResponse:
    """Replace username and college."""
    profile = await service.update_profile(user.id, body.username, body.college)
    return ProfileUpdateResponse(
        message=PROFILE_UPDATED_MESSAGE,
        data=_to_response(profile, user.email),
    )
