"""Dependency injection factories for services.

Each factory binds a service to the request's database session so endpoint
tests can swap any of them through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.core.database import get_db_session
from fra_atlas.services.analytics_service import AnalyticsService
from fra_atlas.services.claim_service import ClaimService
from fra_atlas.services.export_service import ExportService
from fra_atlas.services.extraction_service import ExtractionService
from fra_atlas.services.notification_service import NotificationService
from fra_atlas.services.official_service import OfficialService
from fra_atlas.services.profile_service import ProfileService
from fra_atlas.services.scheme_service import SchemeService

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_profile_service(db_session: DbSession) -> ProfileService:
    """Get profile service instance.

    Args:
        db_session: Database session from dependency injection

    Returns:
        ProfileService: Service for profile lookups and updates
    """
    return ProfileService(db_session)


async def get_notification_service() -> NotificationService:
    return NotificationService()


async def get_claim_service(
    db_session: DbSession,
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
) -> ClaimService:
    """Get claim service instance.

    Args:
        db_session: Database session from dependency injection
        notifications: Email sender used for status notifications

    Returns:
        ClaimService: Service for claim submission and review
    """
    return ClaimService(db_session, notifications=notifications)


async def get_official_service(db_session: DbSession) -> OfficialService:
    return OfficialService(db_session)


async def get_export_service(db_session: DbSession) -> ExportService:
    return ExportService(db_session)


async def get_extraction_service(db_session: DbSession) -> ExtractionService:
    return ExtractionService(db_session)


async def get_analytics_service(db_session: DbSession) -> AnalyticsService:
    return AnalyticsService(db_session)


async def get_scheme_service(db_session: DbSession) -> SchemeService:
    return SchemeService(db_session)
