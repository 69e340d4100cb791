"""Profile endpoints for the signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from fra_atlas.core.auth import get_current_profile
from fra_atlas.core.dependencies import get_profile_service
from fra_atlas.schemas.profiles import ProfileResponse, ProfileUpdate
from fra_atlas.services.profile_service import ProfileService
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    description="Return the caller's profile, creating a citizen profile on first sign-in",
    operation_id="get_my_profile",
)
async def get_my_profile(
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
) -> ProfileResponse:
    return profile


@router.patch(
    "/me",
    response_model=ProfileResponse,
    summary="Update my profile",
    description="Change name, phone, address or notification preferences",
    operation_id="update_my_profile",
)
async def update_my_profile(
    data: ProfileUpdate,
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    LOGGER.info(f"Profile update requested by {profile.user_id}")
    return await profile_service.update_profile(profile.user_id, data)


@router.post(
    "/me/avatar",
    response_model=ProfileResponse,
    summary="Upload avatar",
    description="Replace the caller's avatar image (JPEG, PNG or WebP)",
    operation_id="upload_my_avatar",
)
async def upload_my_avatar(
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    file: UploadFile = File(...),
) -> ProfileResponse:
    return await profile_service.upload_avatar(profile.user_id, file)
