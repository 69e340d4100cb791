"""Data access layer, one repository per table."""

from fra_atlas.repositories.admin_action_repository import AdminActionRepository
from fra_atlas.repositories.base_repository import BaseRepository
from fra_atlas.repositories.claim_repository import ClaimRepository
from fra_atlas.repositories.digitization_repository import DigitizationRepository
from fra_atlas.repositories.profile_repository import ProfileRepository

__all__ = [
    "BaseRepository",
    "ClaimRepository",
    "ProfileRepository",
    "AdminActionRepository",
    "DigitizationRepository",
]
