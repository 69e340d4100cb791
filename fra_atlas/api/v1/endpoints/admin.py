"""Super-admin endpoints: official accounts, profiles and the audit trail."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, status

from fra_atlas.core.auth import require_super_admin
from fra_atlas.core.dependencies import get_official_service, get_profile_service
from fra_atlas.schemas.admin import AdminActionList, OfficialCreate, OfficialCreated
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.services.official_service import OfficialService
from fra_atlas.services.profile_service import ProfileService
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "/officials",
    response_model=OfficialCreated,
    status_code=status.HTTP_200_OK,
    summary="Create an official account",
    description="Create a confirmed login with the official role and record the action in the audit log",
    operation_id="create_official",
)
async def create_official(
    data: OfficialCreate,
    admin: Annotated[ProfileResponse, Depends(require_super_admin)],
    official_service: Annotated[OfficialService, Depends(get_official_service)],
) -> OfficialCreated:
    LOGGER.info(f"Official account requested by {admin.user_id}")
    return await official_service.create_official(admin, data)


@router.get(
    "/profiles",
    response_model=List[ProfileResponse],
    summary="List profiles",
    description="All user profiles, newest first",
    operation_id="list_profiles",
)
async def list_profiles(
    _: Annotated[ProfileResponse, Depends(require_super_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(200, ge=1, le=1000),
) -> List[ProfileResponse]:
    return await profile_service.list_profiles(skip=skip, limit=limit)


@router.get(
    "/actions",
    response_model=AdminActionList,
    summary="Audit log",
    description="Recent administrative actions with the acting admin's name and email",
    operation_id="list_admin_actions",
)
async def list_admin_actions(
    _: Annotated[ProfileResponse, Depends(require_super_admin)],
    official_service: Annotated[OfficialService, Depends(get_official_service)],
    limit: int = Query(50, ge=1, le=500),
) -> AdminActionList:
    return await official_service.list_admin_actions(limit=limit)
