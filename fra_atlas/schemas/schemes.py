"""Welfare scheme recommendation schemas."""

from enum import Enum
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SchemeRecommendation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scheme: str
    description: str
    benefits: str
    priority: Priority
    eligibility_criteria: List[str] = Field(default_factory=list, alias="eligibilityCriteria")
    reason: str = Field(..., description="Why the scheme applies to this claim")


class SchemeRecommendationList(BaseModel):
    claim_id: UUID
    recommendations: List[SchemeRecommendation]


__all__ = ["Priority", "SchemeRecommendation", "SchemeRecommendationList"]
