"""Repository for claim data access."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fra_atlas.database.models import Claim
from fra_atlas.repositories.base_repository import BaseRepository
from fra_atlas.schemas.claims import ClaimFilters
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


def day_start(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def day_after(value: date) -> datetime:
    """Start of the following day, for inclusive end dates."""
    return day_start(value) + timedelta(days=1)


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so search text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ClaimRepository(BaseRepository[Claim]):
    """Repository for Claim records."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Claim)

    def _apply_filters(
        self,
        stmt: Select,
        filters: ClaimFilters,
        owner_id: Optional[str] = None,
    ) -> Select:
        if owner_id is not None:
            stmt = stmt.where(Claim.user_id == owner_id)
        if filters.status:
            stmt = stmt.where(Claim.status == filters.status.value)
        if filters.claim_type:
            stmt = stmt.where(Claim.claim_type == filters.claim_type.value)
        if filters.state:
            stmt = stmt.where(Claim.state == filters.state)
        if filters.district:
            stmt = stmt.where(Claim.district == filters.district)
        if filters.search:
            pattern = f"%{escape_like(filters.search.strip())}%"
            stmt = stmt.where(
                or_(
                    Claim.village.ilike(pattern, escape="\\"),
                    Claim.district.ilike(pattern, escape="\\"),
                    Claim.claim_type.ilike(pattern, escape="\\"),
                )
            )
        if filters.start_date:
            stmt = stmt.where(Claim.submitted_at >= day_start(filters.start_date))
        if filters.end_date:
            stmt = stmt.where(Claim.submitted_at < day_after(filters.end_date))
        return stmt

    async def list_claims(
        self,
        filters: ClaimFilters,
        owner_id: Optional[str] = None,
    ) -> Tuple[List[Claim], int]:
        """List claims newest first.

        Args:
            filters: Column filters, search text, date range and paging
            owner_id: Restrict to one user's claims when set

        Returns:
            Page of claims and the total number matching the filters
        """
        stmt = self._apply_filters(select(Claim), filters, owner_id)
        stmt = stmt.order_by(Claim.submitted_at.desc()).offset(filters.skip).limit(filters.limit)
        result = await self.session.execute(stmt)
        claims = list(result.scalars().all())

        count_stmt = self._apply_filters(select(func.count()).select_from(Claim), filters, owner_id)
        total = (await self.session.execute(count_stmt)).scalar_one()

        return claims, total

    async def get_many(self, claim_ids: Sequence[UUID]) -> List[Claim]:
        if not claim_ids:
            return []
        stmt = select(Claim).where(Claim.id.in_(list(claim_ids)))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_export(
        self,
        status: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Claim]:
        """Claims with their applicant profile loaded, newest first.

        Both bounds are inclusive.
        """
        stmt = select(Claim).options(selectinload(Claim.applicant))
        if status:
            stmt = stmt.where(Claim.status == status)
        if start is not None:
            stmt = stmt.where(Claim.submitted_at >= start)
        if end is not None:
            stmt = stmt.where(Claim.submitted_at <= end)
        stmt = stmt.order_by(Claim.submitted_at.desc())

        result = await self.session.execute(stmt)
        claims = list(result.scalars().all())
        LOGGER.debug(f"Export query matched {len(claims)} claims", extra={"status": status})
        return claims

    async def list_all(self) -> List[Claim]:
        stmt = select(Claim).order_by(Claim.submitted_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by(self, column: Any) -> List[Tuple[str, int]]:
        """Group counts over one claim column, largest group first."""
        stmt = (
            select(column, func.count(Claim.id))
            .group_by(column)
            .order_by(func.count(Claim.id).desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
