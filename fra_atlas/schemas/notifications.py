"""Notification email schemas."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from fra_atlas.schemas.claims import ClaimStatus


class ClaimStatusEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: EmailStr
    subject: Optional[str] = None
    claim_id: str = Field(..., alias="claimId")
    status: ClaimStatus
    remarks: Optional[str] = None
    user_name: str = Field(..., alias="userName")


class EmailSendResult(BaseModel):
    id: Optional[str] = Field(None, description="Provider message ID")
    provider_response: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["ClaimStatusEmailRequest", "EmailSendResult"]
