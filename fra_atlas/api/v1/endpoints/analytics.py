from typing import Annotated

from fastapi import APIRouter, Depends

from fra_atlas.core.auth import require_staff
from fra_atlas.core.dependencies import get_analytics_service
from fra_atlas.schemas.analytics import ClaimAnalytics
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get(
    "/claims",
    response_model=ClaimAnalytics,
    response_model_by_alias=True,
    summary="Claim analytics",
    description="Status counts, processing time, breakdowns by type and state, and monthly trends",
    operation_id="get_claim_analytics",
)
async def get_claim_analytics(
    _: Annotated[ProfileResponse, Depends(require_staff)],
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
) -> ClaimAnalytics:
    return await analytics_service.claim_analytics()
