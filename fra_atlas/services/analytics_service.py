"""Dashboard analytics over all claims."""

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.database.models import Claim
from fra_atlas.repositories.claim_repository import ClaimRepository
from fra_atlas.schemas.analytics import ClaimAnalytics, MonthlyTrend, NamedCount
from fra_atlas.schemas.claims import ClaimStatus

SECONDS_PER_DAY = 60 * 60 * 24
TREND_MONTHS = 6


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def average_processing_days(claims: List[Claim]) -> int:
    """Mean time from submission to review, rounded to whole days."""
    durations = [
        (as_utc(c.reviewed_at) - as_utc(c.submitted_at)).total_seconds()
        for c in claims
        if c.reviewed_at is not None and c.submitted_at is not None
    ]
    if not durations:
        return 0
    return round(sum(durations) / len(durations) / SECONDS_PER_DAY)


def monthly_trends(claims: List[Claim], months: int = TREND_MONTHS) -> List[MonthlyTrend]:
    """Submitted/approved/rejected counts for the latest ``months`` months with claims."""
    buckets: Dict[Tuple[int, int], MonthlyTrend] = {}
    for claim in claims:
        submitted: datetime = claim.submitted_at
        key = (submitted.year, submitted.month)
        if key not in buckets:
            buckets[key] = MonthlyTrend(month=submitted.strftime("%b %y"))
        trend = buckets[key]
        trend.submitted += 1
        if claim.status == ClaimStatus.APPROVED.value:
            trend.approved += 1
        elif claim.status == ClaimStatus.REJECTED.value:
            trend.rejected += 1

    return [buckets[key] for key in sorted(buckets)][-months:]


class AnalyticsService:
    def __init__(self, db_session: AsyncSession):
        self.repository = ClaimRepository(db_session)

    async def claim_analytics(self) -> ClaimAnalytics:
        claims = await self.repository.list_all()
        by_status = Counter(c.status for c in claims)

        by_type = await self.repository.count_by(Claim.claim_type)
        by_state = await self.repository.count_by(Claim.state)

        return ClaimAnalytics(
            total_claims=len(claims),
            pending_claims=by_status[ClaimStatus.PENDING.value],
            under_review_claims=by_status[ClaimStatus.UNDER_REVIEW.value],
            approved_claims=by_status[ClaimStatus.APPROVED.value],
            rejected_claims=by_status[ClaimStatus.REJECTED.value],
            avg_processing_days=average_processing_days(claims),
            claims_by_type=[NamedCount(name=name, value=count) for name, count in by_type],
            claims_by_state=[NamedCount(name=name, value=count) for name, count in by_state],
            trends=monthly_trends(claims),
        )
