"""SQLAlchemy models for all database tables."""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fra_atlas.core.database import Base

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    """Application profile for a Supabase auth identity."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(
        String, nullable=False, default="citizen"
    )  # citizen | official | super_admin
    avatar_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    notification_preferences: Mapped[dict[str, Any]] = mapped_column(
        JSONType, nullable=False, default=lambda: {"email": True, "sms": False}
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    claims: Mapped[list["Claim"]] = relationship(
        "Claim",
        back_populates="applicant",
        foreign_keys="Claim.user_id",
    )


class Claim(Base):
    """Forest Rights Act claim submitted by a citizen."""

    __tablename__ = "claims"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    claim_type: Mapped[str] = mapped_column(String, nullable=False)  # individual | community
    village: Mapped[str] = mapped_column(String, nullable=False)
    district: Mapped[str] = mapped_column(String, nullable=False)
    state: Mapped[str] = mapped_column(String, nullable=False, index=True)
    land_area: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    claim_description: Mapped[str] = mapped_column(Text, nullable=False)
    coordinates: Mapped[Optional[dict[str, float]]] = mapped_column(JSONType, nullable=True)
    documents: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default="pending", index=True
    )  # pending | under_review | approved | rejected
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    digitization_result_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    applicant: Mapped["Profile"] = relationship(
        "Profile", back_populates="claims", foreign_keys=[user_id]
    )


class AdminAction(Base):
    """Audit trail entry for an administrative action."""

    __tablename__ = "admin_actions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    admin_user_id: Mapped[str] = mapped_column(
        String, ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type: Mapped[str] = mapped_column(String, nullable=False)
    target_user_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    details: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    admin: Mapped["Profile"] = relationship("Profile", foreign_keys=[admin_user_id])


class DigitizationResult(Base):
    """Stored output of OCR/AI extraction over an uploaded document image."""

    __tablename__ = "digitization_results"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("profiles.user_id", ondelete="SET NULL"), nullable=True, index=True
    )
    claim_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("claims.id", ondelete="SET NULL"), nullable=True
    )
    file_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    raw_text: Mapped[str] = mapped_column(Text, nullable=False)
    structured_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
