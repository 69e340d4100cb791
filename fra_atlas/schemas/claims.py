"""Claim schemas."""

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClaimStatus(str, Enum):
    """Lifecycle states of a claim."""

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class ClaimType(str, Enum):
    INDIVIDUAL = "individual"
    COMMUNITY = "community"


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


def format_area(value: float) -> str:
    """Hectares at full precision, without a trailing ``.0`` on whole numbers."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def parse_coordinates(value: Any) -> Optional[dict]:
    """Accept ``{"lat", "lng"}`` or a ``"lat, lng"`` string.

    A string that does not hold exactly two numbers yields None, matching
    the lenient behaviour of the claim form.
    """
    if value is None or isinstance(value, (dict, Coordinates)):
        return value
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(",")]
        if len(parts) != 2:
            return None
        try:
            return {"lat": float(parts[0]), "lng": float(parts[1])}
        except ValueError:
            return None
    return value


class DocumentRef(BaseModel):
    """Reference to a file stored in the documents bucket."""

    id: str
    name: str
    type: str
    size: int
    url: str
    path: Optional[str] = Field(None, description="Object path inside the bucket")
    uploaded_at: datetime


class ClaimCreate(BaseModel):
    """Payload for submitting a new claim."""

    model_config = ConfigDict(str_strip_whitespace=True)

    claim_type: ClaimType
    village: str = Field(..., min_length=1, max_length=200)
    district: str = Field(..., min_length=1, max_length=200)
    state: str = Field(..., min_length=1, max_length=200)
    land_area: Optional[float] = Field(None, ge=0, description="Area in hectares")
    claim_description: str = Field(..., min_length=10, max_length=2000)
    coordinates: Optional[Union[Coordinates, str]] = None
    documents: List[DocumentRef] = Field(default_factory=list)
    digitization_result_id: Optional[UUID] = None

    @field_validator("coordinates", mode="before")
    @classmethod
    def _coerce_coordinates(cls, value: Any) -> Any:
        return parse_coordinates(value)

    @field_validator("land_area", mode="before")
    @classmethod
    def _blank_area_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ClaimResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    claim_type: ClaimType
    village: str
    district: str
    state: str
    land_area: Optional[float] = None
    claim_description: str
    coordinates: Optional[Coordinates] = None
    documents: List[DocumentRef] = Field(default_factory=list)
    status: ClaimStatus
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    remarks: Optional[str] = None
    digitization_result_id: Optional[UUID] = None


class ClaimListResponse(BaseModel):
    total: int
    claims: List[ClaimResponse]


class ClaimFilters(BaseModel):
    """Query filters for listing claims."""

    status: Optional[ClaimStatus] = None
    claim_type: Optional[ClaimType] = None
    state: Optional[str] = None
    district: Optional[str] = None
    search: Optional[str] = Field(None, description="Substring of village, district or claim type")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    skip: int = Field(0, ge=0)
    limit: int = Field(100, ge=1, le=500)


class ClaimStatusUpdate(BaseModel):
    status: ClaimStatus
    remarks: Optional[str] = Field(None, max_length=2000)
    notify: bool = Field(False, description="Email the applicant about the change")


class BulkStatusUpdate(BaseModel):
    claim_ids: List[UUID] = Field(..., min_length=1)
    status: ClaimStatus
    remarks: Optional[str] = Field(None, max_length=2000)


class BulkStatusResult(BaseModel):
    updated: int
    status: ClaimStatus


__all__ = [
    "ClaimStatus",
    "ClaimType",
    "Coordinates",
    "DocumentRef",
    "ClaimCreate",
    "ClaimResponse",
    "ClaimListResponse",
    "ClaimFilters",
    "ClaimStatusUpdate",
    "BulkStatusUpdate",
    "BulkStatusResult",
    "format_area",
    "parse_coordinates",
]
