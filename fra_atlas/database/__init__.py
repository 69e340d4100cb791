"""Database models package."""

from fra_atlas.database.models import AdminAction, Claim, DigitizationResult, Profile

__all__ = ["Profile", "Claim", "AdminAction", "DigitizationResult"]
