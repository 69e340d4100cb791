"""Claim analytics schemas."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NamedCount(BaseModel):
    name: str
    value: int


class MonthlyTrend(BaseModel):
    month: str = Field(..., description='Label such as "Mar 25"')
    submitted: int = 0
    approved: int = 0
    rejected: int = 0


class ClaimAnalytics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_claims: int = Field(..., alias="totalClaims")
    pending_claims: int = Field(..., alias="pendingClaims")
    under_review_claims: int = Field(..., alias="underReviewClaims")
    approved_claims: int = Field(..., alias="approvedClaims")
    rejected_claims: int = Field(..., alias="rejectedClaims")
    avg_processing_days: int = Field(..., alias="avgProcessingTime")
    claims_by_type: List[NamedCount] = Field(default_factory=list, alias="claimsByType")
    claims_by_state: List[NamedCount] = Field(default_factory=list, alias="claimsByState")
    trends: List[MonthlyTrend] = Field(default_factory=list, alias="trendsData")


__all__ = ["NamedCount", "MonthlyTrend", "ClaimAnalytics"]
