"""Authentication schemas for Supabase JWT tokens."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class JWTClaims(BaseModel):
    """Decoded claims of a Supabase access token."""

    sub: str = Field(..., description="Subject (auth user ID)")
    email: str = Field(default="", description="User email")
    role: str = Field(default="authenticated", description="Postgres role claim")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    iss: str = Field(..., description="Token issuer")

    aud: Optional[str] = Field(None, description="Audience")
    app_metadata: Optional[Dict[str, Any]] = Field(None, description="Application metadata")
    user_metadata: Optional[Dict[str, Any]] = Field(None, description="User metadata")
    session_id: Optional[str] = Field(None, description="Session ID")


class CurrentUser(BaseModel):
    """Authenticated identity taken from a verified token."""

    id: str = Field(..., description="Supabase auth user ID")
    email: str = Field(..., description="User email")
    full_name: Optional[str] = Field(None, description="Full name from user metadata")
    app_metadata: Optional[Dict[str, Any]] = None
    user_metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def from_claims(cls, claims: JWTClaims) -> "CurrentUser":
        metadata = claims.user_metadata or {}
        return cls(
            id=claims.sub,
            email=claims.email,
            full_name=metadata.get("full_name"),
            app_metadata=claims.app_metadata,
            user_metadata=claims.user_metadata,
        )


__all__ = ["JWTClaims", "CurrentUser"]
