"""Authentication models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JWTPayload(BaseModel):
    """Claims of a Supabase access token (or a synthetic local-dev payload)."""

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(..., description="Subject (user_id)")
    email: Optional[str] = None
    role: Optional[str] = None
    aud: Optional[str] = None
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    exp: Optional[int] = Field(None, description="Expiration timestamp")


class CurrentUser(BaseModel):
    """Authenticated user as reported to the client."""

    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None


__all__ = ["JWTPayload", "CurrentUser"]
