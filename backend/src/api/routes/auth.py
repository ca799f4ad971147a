"""Authentication routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...models.auth import CurrentUser
from ..middleware import AuthContext, get_auth_context

router = APIRouter()


@router.get("/api/me", response_model=CurrentUser)
async def get_current_user(auth: AuthContext = Depends(get_auth_context)):
    """Get the user the bearer token belongs to."""
    return CurrentUser(
        user_id=auth.user_id,
        email=auth.payload.email,
        role=auth.payload.role,
    )


__all__ = ["router"]
