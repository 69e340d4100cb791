"""Repository for the administrative audit trail."""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fra_atlas.database.models import AdminAction
from fra_atlas.repositories.base_repository import BaseRepository


class AdminActionRepository(BaseRepository[AdminAction]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, AdminAction)

    async def record(
        self,
        admin_user_id: str,
        action_type: str,
        target_user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> AdminAction:
        return await self.create(
            admin_user_id=admin_user_id,
            action_type=action_type,
            target_user_id=target_user_id,
            details=details,
        )

    async def list_recent(self, limit: int = 50) -> List[AdminAction]:
        """Most recent actions first, with the acting admin's profile loaded."""
        stmt = (
            select(AdminAction)
            .options(selectinload(AdminAction.admin))
            .order_by(AdminAction.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
