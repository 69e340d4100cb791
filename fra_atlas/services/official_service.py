"""Super-admin operations: official accounts and the audit trail."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.core.exceptions import PermissionDeniedError, ValidationError
from fra_atlas.repositories.admin_action_repository import AdminActionRepository
from fra_atlas.repositories.profile_repository import ProfileRepository
from fra_atlas.schemas.admin import (
    ActorSummary,
    AdminActionList,
    AdminActionResponse,
    OfficialCreate,
    OfficialCreated,
)
from fra_atlas.schemas.profiles import ProfileResponse, Role
from fra_atlas.services.auth_admin_service import AuthAdminService
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

CREATE_OFFICIAL = "create_official"


class OfficialService:
    """Creates official accounts and reads the administrative audit log."""

    def __init__(self, db_session: AsyncSession, auth_admin: Optional[AuthAdminService] = None):
        self.db_session = db_session
        self.profiles = ProfileRepository(db_session)
        self.actions = AdminActionRepository(db_session)
        self.auth_admin = auth_admin or AuthAdminService()

    async def create_official(self, admin: ProfileResponse, data: OfficialCreate) -> OfficialCreated:
        """Create a confirmed login, an official profile and an audit entry.

        Args:
            admin: Profile of the acting super-admin
            data: Email, password and full name of the new official

        Returns:
            The created auth user and a confirmation message

        Raises:
            PermissionDeniedError: If the caller is not a super-admin
            ValidationError: If a field is missing or Supabase rejects the account
        """
        if admin.role != Role.SUPER_ADMIN:
            raise PermissionDeniedError("Insufficient permissions")

        email = (data.email or "").strip()
        full_name = (data.full_name or "").strip()
        if not email or not data.password or not full_name:
            raise ValidationError("Missing required fields")

        user = await self.auth_admin.create_user(
            email=email,
            password=data.password,
            user_metadata={"full_name": full_name, "role": Role.OFFICIAL.value},
            email_confirm=True,
        )
        new_user_id = str(user["id"])

        await self.profiles.create(
            user_id=new_user_id,
            email=email,
            full_name=full_name,
            role=Role.OFFICIAL.value,
        )
        await self.db_session.commit()

        try:
            await self.actions.record(
                admin_user_id=admin.user_id,
                action_type=CREATE_OFFICIAL,
                target_user_id=new_user_id,
                details={"email": email, "full_name": full_name},
            )
            await self.db_session.commit()
        except SQLAlchemyError:
            await self.db_session.rollback()
            LOGGER.error("Error logging admin action", exc_info=True, extra={"target_user_id": new_user_id})

        LOGGER.info(f"Official {new_user_id} created by {admin.user_id}")
        return OfficialCreated(
            success=True,
            user=user,
            message=f"Official account created for {full_name}",
        )

    async def list_admin_actions(self, limit: int = 50) -> AdminActionList:
        """Most recent administrative actions with the acting admin's name and email."""
        actions = await self.actions.list_recent(limit=limit)
        items = []
        for action in actions:
            item = AdminActionResponse.model_validate(action)
            if action.admin is not None:
                item.profiles = ActorSummary(full_name=action.admin.full_name, email=action.admin.email)
            items.append(item)
        return AdminActionList(actions=items)
