"""Document digitization (OCR) endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from fra_atlas.core.auth import get_current_user, get_current_user_optional
from fra_atlas.core.dependencies import get_extraction_service, get_profile_service
from fra_atlas.schemas.auth import CurrentUser
from fra_atlas.schemas.digitization import DigitizationResultList, ExtractionResult, ExtractTextRequest
from fra_atlas.services.extraction_service import ExtractionService
from fra_atlas.services.profile_service import ProfileService

router = APIRouter()


@router.post(
    "/extract-text",
    response_model=ExtractionResult,
    response_model_by_alias=True,
    summary="Extract text from a document image",
    description=(
        "OCR a scanned claim document, translating to English, and pull out claim fields. "
        "Signed-in callers also get the result stored."
    ),
    operation_id="extract_text",
)
async def extract_text(
    request: ExtractTextRequest,
    extraction_service: Annotated[ExtractionService, Depends(get_extraction_service)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    user: Annotated[Optional[CurrentUser], Depends(get_current_user_optional)],
) -> ExtractionResult:
    if user is not None and (request.image_url or "").strip():
        # Stored results reference the caller's profile
        await profile_service.get_or_create_for_user(user)
    return await extraction_service.extract_text(request, user)


@router.get(
    "/results",
    response_model=DigitizationResultList,
    summary="My extraction results",
    operation_id="list_digitization_results",
)
async def list_results(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    extraction_service: Annotated[ExtractionService, Depends(get_extraction_service)],
) -> DigitizationResultList:
    return await extraction_service.list_results(user)
