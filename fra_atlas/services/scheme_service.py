"""Welfare scheme recommendations for FRA claimants."""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.core.exceptions import NotFoundError
from fra_atlas.repositories.claim_repository import ClaimRepository
from fra_atlas.schemas.claims import ClaimType, format_area
from fra_atlas.schemas.profiles import ProfileResponse
from fra_atlas.schemas.schemes import Priority, SchemeRecommendation, SchemeRecommendationList
from fra_atlas.services.claim_service import can_view

# Upper bound for small and marginal holdings, in hectares
SMALL_HOLDING_HECTARES = 2.0

PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass(frozen=True)
class Scheme:
    name: str
    description: str
    benefits: str
    eligibility_criteria: List[str] = field(default_factory=list)


PM_KISAN = Scheme(
    name="PM-KISAN",
    description="Direct income support scheme for farmers",
    benefits="Rs. 6,000 per year in three installments",
    eligibility_criteria=["Small and marginal farmers", "Land ownership documents required"],
)
JAL_JEEVAN_MISSION = Scheme(
    name="Jal Jeevan Mission",
    description="Providing functional household tap connections",
    benefits="Clean drinking water supply to households",
    eligibility_criteria=["Rural households", "Areas with water scarcity"],
)
MGNREGA = Scheme(
    name="MGNREGA",
    description="Employment guarantee scheme for rural households",
    benefits="100 days of guaranteed employment per year",
    eligibility_criteria=["Rural households", "Adult members willing to work"],
)
DAJGUA = Scheme(
    name="DAJGUA",
    description="Development of Particularly Vulnerable Tribal Groups",
    benefits="Comprehensive development package",
    eligibility_criteria=["Particularly Vulnerable Tribal Groups", "Remote tribal areas"],
)

CATALOG = [PM_KISAN, JAL_JEEVAN_MISSION, MGNREGA, DAJGUA]


def _recommend(scheme: Scheme, priority: Priority, reason: str) -> SchemeRecommendation:
    return SchemeRecommendation(
        scheme=scheme.name,
        description=scheme.description,
        benefits=scheme.benefits,
        priority=priority,
        eligibility_criteria=list(scheme.eligibility_criteria),
        reason=reason,
    )


def recommend(claim_type: ClaimType, land_area: Optional[float]) -> List[SchemeRecommendation]:
    """Schemes that apply to a claim, highest priority first."""
    claim_type = ClaimType(claim_type)
    results = []

    if claim_type == ClaimType.INDIVIDUAL and land_area:
        if land_area <= SMALL_HOLDING_HECTARES:
            results.append(_recommend(PM_KISAN, Priority.HIGH, f"Small holding of {format_area(land_area)} ha"))
        else:
            results.append(_recommend(PM_KISAN, Priority.MEDIUM, f"Individual holding of {format_area(land_area)} ha"))

    results.append(_recommend(JAL_JEEVAN_MISSION, Priority.HIGH, "Forest-dwelling rural household"))
    results.append(_recommend(MGNREGA, Priority.MEDIUM, "Rural household eligible for wage employment"))

    if claim_type == ClaimType.COMMUNITY:
        results.append(_recommend(DAJGUA, Priority.HIGH, "Community forest rights claim"))
    else:
        results.append(_recommend(DAJGUA, Priority.LOW, "Tribal area development support"))

    return sorted(results, key=lambda r: PRIORITY_ORDER[r.priority])


class SchemeService:
    def __init__(self, db_session: AsyncSession):
        self.claims = ClaimRepository(db_session)

    async def recommend_for_claim(self, profile: ProfileResponse, claim_id: UUID) -> SchemeRecommendationList:
        """Recommend schemes for a claim the caller is allowed to see.

        Raises:
            NotFoundError: If the claim is missing or not visible to the caller
        """
        claim = await self.claims.get_by_id(claim_id)
        if claim is None or not can_view(profile, claim):
            raise NotFoundError(f"Claim {claim_id} not found")

        return SchemeRecommendationList(
            claim_id=claim.id,
            recommendations=recommend(ClaimType(claim.claim_type), claim.land_area),
        )
