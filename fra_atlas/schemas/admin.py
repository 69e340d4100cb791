"""Schemas for super-admin operations."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OfficialCreate(BaseModel):
    """Payload for creating an official account.

    Fields are optional at the schema level so that a missing value is
    reported as a plain 400 by the service rather than a schema error.
    """

    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None


class OfficialCreated(BaseModel):
    success: bool = True
    user: Dict[str, Any]
    message: str


class ActorSummary(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None


class AdminActionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    admin_user_id: str
    action_type: str
    target_user_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime
    profiles: Optional[ActorSummary] = Field(None, description="Acting admin's name and email")


class AdminActionList(BaseModel):
    actions: List[AdminActionResponse]


__all__ = ["OfficialCreate", "OfficialCreated", "ActorSummary", "AdminActionResponse", "AdminActionList"]
