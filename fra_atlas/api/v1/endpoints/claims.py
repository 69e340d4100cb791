"""Claim submission and review endpoints."""

from datetime import date
from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from fra_atlas.core.auth import get_current_profile, require_official
from fra_atlas.core.dependencies import get_claim_service
from fra_atlas.schemas.claims import (
    BulkStatusResult,
    BulkStatusUpdate,
    ClaimCreate,
    ClaimFilters,
    ClaimListResponse,
    ClaimResponse,
    ClaimStatus,
    ClaimStatusUpdate,
    ClaimType,
)
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.services.claim_service import ClaimService
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


async def claim_filters(
    status: Optional[ClaimStatus] = None,
    claim_type: Optional[ClaimType] = None,
    state: Optional[str] = None,
    district: Optional[str] = None,
    search: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> ClaimFilters:
    return ClaimFilters(
        status=status,
        claim_type=claim_type,
        state=state,
        district=district,
        search=search,
        start_date=start_date,
        end_date=end_date,
        skip=skip,
        limit=limit,
    )


@router.post(
    "",
    response_model=ClaimResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a claim",
    description="Submit a new Forest Rights Act claim; it starts as pending",
    operation_id="create_claim",
)
async def create_claim(
    data: ClaimCreate,
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> ClaimResponse:
    return await claim_service.create_claim(profile.user_id, data)


@router.get(
    "",
    response_model=ClaimListResponse,
    summary="List claims",
    description="Citizens see their own claims; officials and super-admins see all claims",
    operation_id="list_claims",
)
async def list_claims(
    filters: Annotated[ClaimFilters, Depends(claim_filters)],
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> ClaimListResponse:
    return await claim_service.list_claims(profile, filters)


@router.post(
    "/bulk-status",
    response_model=BulkStatusResult,
    summary="Bulk status update",
    description="Move several claims to one status; either all are updated or none",
    operation_id="bulk_update_claim_status",
)
async def bulk_update_status(
    data: BulkStatusUpdate,
    reviewer: Annotated[ProfileResponse, Depends(require_official)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> BulkStatusResult:
    LOGGER.info(f"Bulk status update of {len(data.claim_ids)} claims by {reviewer.user_id}")
    return await claim_service.bulk_update_status(reviewer, data.claim_ids, data.status, data.remarks)


@router.get(
    "/{claim_id}",
    response_model=ClaimResponse,
    summary="Get a claim",
    operation_id="get_claim",
)
async def get_claim(
    claim_id: UUID,
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> ClaimResponse:
    return await claim_service.get_claim(profile, claim_id)


@router.patch(
    "/{claim_id}/status",
    response_model=ClaimResponse,
    summary="Review a claim",
    description="Change a claim's status and remarks, optionally emailing the applicant",
    operation_id="update_claim_status",
)
async def update_claim_status(
    claim_id: UUID,
    data: ClaimStatusUpdate,
    reviewer: Annotated[ProfileResponse, Depends(require_official)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> ClaimResponse:
    return await claim_service.update_status(
        reviewer, claim_id, data.status, remarks=data.remarks, notify=data.notify
    )


@router.post(
    "/{claim_id}/documents",
    response_model=ClaimResponse,
    summary="Attach documents",
    description="Upload supporting documents to an existing claim",
    operation_id="attach_claim_documents",
)
async def attach_documents(
    claim_id: UUID,
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
    files: List[UploadFile] = File(...),
) -> ClaimResponse:
    return await claim_service.attach_documents(profile, claim_id, files)


@router.delete(
    "/{claim_id}/documents/{document_id}",
    response_model=ClaimResponse,
    summary="Remove a document",
    operation_id="remove_claim_document",
)
async def remove_document(
    claim_id: UUID,
    document_id: str,
    profile: Annotated[ProfileResponse, Depends(get_current_profile)],
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> ClaimResponse:
    return await claim_service.remove_document(profile, claim_id, document_id)
