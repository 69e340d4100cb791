"""Claim export endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from fra_atlas.core.auth import require_staff
from fra_atlas.core.dependencies import get_export_service
from fra_atlas.schemas.exports import ExportRequest
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.services.export_service import ExportService
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "/claims",
    summary="Export claims",
    description="Download claims with applicant details as CSV or JSON",
    operation_id="export_claims",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}, "application/json": {}}}},
)
async def export_claims(
    request: ExportRequest,
    profile: Annotated[ProfileResponse, Depends(require_staff)],
    export_service: Annotated[ExportService, Depends(get_export_service)],
) -> Response:
    LOGGER.info(f"Exporting claims for user {profile.user_id} in {request.format.value} format")
    export = await export_service.export_claims(request.format, request.filters)
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
