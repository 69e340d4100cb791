"""Repository for profile data access."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.database.models import Profile
from fra_atlas.repositories.base_repository import BaseRepository
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile records, keyed by Supabase auth user ID."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Profile)

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        """Get a profile by Supabase user ID.

        Args:
            user_id: Supabase auth user ID

        Returns:
            Profile or None if the user has no profile yet
        """
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_newest_first(self, skip: int = 0, limit: int = 200) -> List[Profile]:
        stmt = select(Profile).order_by(Profile.created_at.desc()).offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_or_create(
        self,
        user_id: str,
        email: str,
        full_name: Optional[str] = None,
        role: str = "citizen",
    ) -> Profile:
        """Get the profile for an auth identity, creating it on first sight.

        An existing profile keeps its role; only the email is refreshed
        when the identity's address has changed.

        Args:
            user_id: Supabase auth user ID
            email: Email from the access token
            full_name: Display name from user metadata
            role: Role for a newly created profile

        Returns:
            Profile (existing or newly created)
        """
        profile = await self.get_by_user_id(user_id)
        if profile:
            if email and profile.email != email:
                profile = await self.update(profile, email=email)
                LOGGER.info(f"Refreshed email for profile {profile.id}")
            return profile

        profile = await self.create(
            user_id=user_id,
            email=email,
            full_name=full_name,
            role=role,
        )
        LOGGER.info(f"Created profile {profile.id} for user {user_id}", extra={"role": role})
        return profile
