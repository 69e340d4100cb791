from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from fra_atlas.core.auth import get_current_profile
from fra_atlas.core.dependencies import get_claim_service
from fra_atlas.schemas.claims import DocumentRef
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.services.claim_service import ClaimService

router = APIRouter()


@router.post(
    "",
    response_model=DocumentRef,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a document",
    description="Store a supporting document before the claim it belongs to is submitted",
    operation_id="upload_document",
)
async def upload_document(
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
    file: UploadFile = File(...),
) -> DocumentRef:
    return await claim_service.upload_document(profile.user_id, file)
