from fastapi import APIRouter

from fra_atlas.api.v1.endpoints import (
    admin,
    analytics,
    claims,
    digitization,
    documents,
    exports,
    notifications,
    profiles,
    schemes,
)

api_router = APIRouter()

api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(claims.router, prefix="/claims", tags=["Claims"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(exports.router, prefix="/exports", tags=["Exports"])
api_router.include_router(digitization.router, prefix="/digitization", tags=["Digitization"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(schemes.router, prefix="/schemes", tags=["Schemes"])

__all__ = ["api_router"]
