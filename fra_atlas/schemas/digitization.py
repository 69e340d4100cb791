"""Text extraction (digitization) schemas.

Field names on the wire are camelCase, matching what the web client sends.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExtractTextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Optional so a missing URL is reported as a 400 by the service
    image_url: Optional[str] = Field(None, alias="imageUrl")
    file_name: Optional[str] = Field(None, alias="fileName")


class ExtractionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[UUID] = Field(None, description="Stored digitization result, when the caller is signed in")
    raw_text: str = Field(..., alias="rawText")
    structured_data: Optional[Dict[str, Any]] = Field(None, alias="structuredData")
    confidence: float


class DigitizationResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: Optional[str] = None
    claim_id: Optional[UUID] = None
    file_name: Optional[str] = None
    image_url: str
    raw_text: str
    structured_data: Optional[Dict[str, Any]] = None
    confidence: float
    created_at: datetime


class DigitizationResultList(BaseModel):
    results: List[DigitizationResultResponse]


__all__ = ["ExtractTextRequest", "ExtractionResult", "DigitizationResultResponse", "DigitizationResultList"]
