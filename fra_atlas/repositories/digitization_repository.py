from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.database.models import DigitizationResult
from fra_atlas.repositories.base_repository import BaseRepository


class DigitizationRepository(BaseRepository[DigitizationResult]):
    """Repository for stored text extraction results."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, DigitizationResult)

    async def list_for_user(self, user_id: str, limit: int = 100) -> List[DigitizationResult]:
        stmt = (
            select(DigitizationResult)
            .where(DigitizationResult.user_id == user_id)
            .order_by(DigitizationResult.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def link_to_claim(self, result_id: UUID, claim_id: UUID, user_id: str) -> bool:
        """Point one of the user's results at a claim.

        Returns:
            False when the result does not exist or belongs to someone else
        """
        result = await self.get_by_id(result_id)
        if result is None or (result.user_id is not None and result.user_id != user_id):
            return False
        await self.update(result, claim_id=claim_id)
        return True
