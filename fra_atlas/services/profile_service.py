"""Profile service: the link between auth identities and application roles."""

from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.core.config import ALLOWED_AVATAR_TYPES, settings
from fra_atlas.core.exceptions import NotFoundError
from fra_atlas.repositories.profile_repository import ProfileRepository
from fra_atlas.schemas.auth import CurrentUser
from fra_atlas.schemas.profiles import ProfileResponse, ProfileUpdate, Role
from fra_atlas.services.storage_service import StorageService, read_upload
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


class ProfileService:
    """Service for profile business logic."""

    def __init__(self, db_session: AsyncSession, storage: Optional[StorageService] = None):
        """Initialize service with database session.

        Args:
            db_session: SQLAlchemy async session
            storage: Storage client used for avatar uploads
        """
        self.db_session = db_session
        self.repository = ProfileRepository(db_session)
        self.storage = storage or StorageService()

    async def get_or_create_for_user(self, user: CurrentUser) -> ProfileResponse:
        """Get the caller's profile, creating it on first sign-in.

        New profiles are always citizens. Token metadata is user-writable, so
        official and super-admin profiles are only created through the admin API.
        """
        profile = await self.repository.get_or_create(
            user_id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=Role.CITIZEN.value,
        )
        await self.db_session.commit()
        return ProfileResponse.model_validate(profile)

    async def get_profile(self, user_id: str) -> ProfileResponse:
        profile = await self.repository.get_by_user_id(user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return ProfileResponse.model_validate(profile)

    async def update_profile(self, user_id: str, data: ProfileUpdate) -> ProfileResponse:
        """Apply a partial update to the user's own profile.

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await self.repository.get_by_user_id(user_id)
        if not profile:
            raise NotFoundError("Profile not found")

        changes = data.model_dump(exclude_unset=True)
        if "notification_preferences" in changes and changes["notification_preferences"] is None:
            changes.pop("notification_preferences")

        profile = await self.repository.update(profile, **changes)
        await self.db_session.commit()
        await self.db_session.refresh(profile)

        LOGGER.info(f"Updated profile for user {user_id}", extra={"fields": sorted(changes)})
        return ProfileResponse.model_validate(profile)

    async def upload_avatar(self, user_id: str, file: UploadFile) -> ProfileResponse:
        """Store a new avatar image and point the profile at it.

        The object path is fixed per user, so a new upload replaces the old one.
        """
        profile = await self.repository.get_by_user_id(user_id)
        if not profile:
            raise NotFoundError("Profile not found")

        content = await read_upload(file, ALLOWED_AVATAR_TYPES, settings.max_upload_bytes)
        filename = file.filename or ""
        if "." in filename:
            ext = filename.rsplit(".", 1)[-1].lower()
        else:
            ext = file.content_type.split("/")[-1]

        bucket = settings.supabase.avatars_bucket
        path = f"{user_id}/avatar.{ext}"
        await self.storage.upload_bytes(bucket, path, content, file.content_type, upsert=True)

        profile = await self.repository.update(profile, avatar_url=self.storage.public_url(bucket, path))
        await self.db_session.commit()
        await self.db_session.refresh(profile)
        return ProfileResponse.model_validate(profile)

    async def list_profiles(self, skip: int = 0, limit: int = 200) -> List[ProfileResponse]:
        profiles = await self.repository.list_newest_first(skip=skip, limit=limit)
        return [ProfileResponse.model_validate(p) for p in profiles]
