"""Claim export to CSV or JSON attachments."""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.database.models import Claim
from fra_atlas.repositories.claim_repository import ClaimRepository
from fra_atlas.schemas.claims import ClaimResponse, format_area
from fra_atlas.schemas.exports import ExportFile, ExportFilters, ExportFormat
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

CSV_HEADERS = [
    "Claim ID",
    "Applicant Name",
    "Email",
    "Phone",
    "Claim Type",
    "State",
    "District",
    "Village",
    "Land Area (Hectares)",
    "Status",
    "Submitted At",
    "Reviewed At",
    "Remarks",
]

MISSING = "N/A"


def _text(value: Optional[str]) -> str:
    return value if value else MISSING


def _day(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else MISSING


def _area(value: Optional[float]) -> str:
    return format_area(value) if value is not None else MISSING


def export_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp in the ``2024-01-31T12:00:00.000Z`` form."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def claim_row(claim: Claim) -> List[str]:
    applicant = claim.applicant
    return [
        str(claim.id),
        _text(applicant.full_name if applicant else None),
        _text(applicant.email if applicant else None),
        _text(applicant.phone if applicant else None),
        claim.claim_type,
        claim.state,
        claim.district,
        claim.village,
        _area(claim.land_area),
        claim.status,
        _day(claim.submitted_at),
        _day(claim.reviewed_at),
        _text(claim.remarks),
    ]


def render_csv(claims: List[Claim]) -> str:
    """Header line, then one line per claim with every cell quoted.

    Lines are separated by ``\\n`` with no trailing newline.
    """
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(CSV_HEADERS)

    rows = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for claim in claims:
        rows.writerow(claim_row(claim))

    return buffer.getvalue().rstrip("\n")


def claim_record(claim: Claim) -> Dict[str, Any]:
    record = ClaimResponse.model_validate(claim).model_dump(mode="json")
    applicant = claim.applicant
    record["profiles"] = (
        {"full_name": applicant.full_name, "email": applicant.email, "phone": applicant.phone}
        if applicant
        else None
    )
    return record


def render_json(claims: List[Claim]) -> str:
    return json.dumps([claim_record(c) for c in claims], indent=2)


class ExportService:
    """Builds claim exports for officials and super-admins."""

    def __init__(self, db_session: AsyncSession):
        self.repository = ClaimRepository(db_session)

    async def export_claims(self, export_format: ExportFormat, filters: ExportFilters) -> ExportFile:
        """Export claims matching the filters, newest first.

        Args:
            export_format: ``csv`` or ``json``
            filters: Exact status and an inclusive submission date range

        Returns:
            File body, media type and attachment filename
        """
        claims = await self.repository.list_for_export(
            status=filters.status.value if filters.status else None,
            start=filters.start_date,
            end=filters.end_date,
        )
        LOGGER.info(f"Exporting {len(claims)} claims", extra={"format": export_format.value})

        stamp = export_timestamp()
        if export_format == ExportFormat.CSV:
            return ExportFile(
                content=render_csv(claims),
                media_type="text/csv",
                filename=f"claims-export-{stamp}.csv",
                count=len(claims),
            )

        return ExportFile(
            content=render_json(claims),
            media_type="application/json",
            filename=f"claims-export-{stamp}.json",
            count=len(claims),
        )
