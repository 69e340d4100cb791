from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from fra_atlas.core.auth import get_current_profile
from fra_atlas.core.dependencies import get_scheme_service
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.schemas.schemes import SchemeRecommendationList
from fra_atlas.services.scheme_service import SchemeService

router = APIRouter()


@router.get(
    "/recommendations/{claim_id}",
    response_model=SchemeRecommendationList,
    response_model_by_alias=True,
    summary="Scheme recommendations",
    description="Centrally sponsored schemes that apply to a claim, highest priority first",
    operation_id="recommend_schemes",
)
async def recommend_schemes(
    claim_id: UUID,
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    scheme_service: Annotated[SchemeService, Depends(get_scheme_service)],
) -> SchemeRecommendationList:
    return await scheme_service.recommend_for_claim(profile, claim_id)
