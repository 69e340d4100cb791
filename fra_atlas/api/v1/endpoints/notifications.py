from typing import Annotated

from fastapi import APIRouter, Depends

from fra_atlas.core.auth import require_official
from fra_atlas.core.dependencies import get_notification_service
from fra_atlas.schemas.notifications import ClaimStatusEmailRequest, EmailSendResult
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.services.notification_service import NotificationService

router = APIRouter()


@router.post(
    "/claim-status",
    response_model=EmailSendResult,
    summary="Send a claim status email",
    description="Email an applicant about their claim's current status",
    operation_id="send_claim_status_email",
)
async def send_claim_status_email(
    request: ClaimStatusEmailRequest,
    _: Annotated[ProfileResponse, Depends(require_official)],
    notification_service: Annotated[NotificationService, Depends(get_notification_service)],
) -> EmailSendResult:
    return await notification_service.send_claim_status_email(
        to=request.to,
        claim_id=request.claim_id,
        status=request.status,
        user_name=request.user_name,
        subject=request.subject,
        remarks=request.remarks,
    )
