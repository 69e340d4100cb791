"""Profile schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Application roles stored on a profile."""

    CITIZEN = "citizen"
    OFFICIAL = "official"
    SUPER_ADMIN = "super_admin"


class NotificationPreferences(BaseModel):
    email: bool = True
    sms: bool = False


class ProfileResponse(BaseModel):
    """Profile as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str = Field(..., description="Supabase auth user ID")
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Role
    avatar_url: Optional[str] = None
    notification_preferences: NotificationPreferences = Field(default_factory=NotificationPreferences)
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = Field(None, max_length=1000)
    notification_preferences: Optional[NotificationPreferences] = None


__all__ = ["Role", "NotificationPreferences", "ProfileResponse", "ProfileUpdate"]
