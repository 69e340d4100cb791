"""Authentication and role dependencies for FastAPI routes.

A bearer token identifies the caller (``CurrentUser``); the caller's
profile row decides what they may do (``require_role``).
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fra_atlas.core.dependencies import get_profile_service
from fra_atlas.core.jwt import jwt_verifier
from fra_atlas.schemas.auth import CurrentUser
from fra_atlas.schemas.profiles import ProfileResponse, Role
from fra_atlas.services.profile_service import ProfileService
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """Get the authenticated identity from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if not credentials:
        LOGGER.warning("No authorization credentials provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = await jwt_verifier.verify_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return CurrentUser.from_claims(claims)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """Like get_current_user, but anonymous or invalid tokens yield None."""
    if not credentials:
        return None

    try:
        return await get_current_user(credentials)
    except HTTPException:
        return None


async def get_current_profile(
    user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Resolve the caller to their profile, creating a citizen profile on first use."""
    return await profile_service.get_or_create_for_user(user)


def require_role(*roles: Role):
    """Create a dependency that admits only profiles holding one of ``roles``.

    Example:
        officials_only = require_role(Role.OFFICIAL)

        @router.patch("/{claim_id}/status")
        async def review(profile: ProfileResponse = Depends(officials_only)):
            ...
    """
    allowed = {Role(r) for r in roles}

    async def role_checker(profile: ProfileResponse = Depends(get_current_profile)) -> ProfileResponse:
        if profile.role not in allowed:
            LOGGER.warning(
                f"Access denied for user {profile.user_id}: role '{profile.role.value}' "
                f"not in {sorted(r.value for r in allowed)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return profile

    return role_checker


require_official = require_role(Role.OFFICIAL)
require_super_admin = require_role(Role.SUPER_ADMIN)
require_staff = require_role(Role.OFFICIAL, Role.SUPER_ADMIN)
