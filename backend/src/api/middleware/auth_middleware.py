"""Authentication dependency helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Header, HTTPException, status

from ...models.auth import JWTPayload
from ...services.auth import LOCAL_AUDIENCE, AuthError, get_auth_service


def _auth_prompt(message: str, error: str = "auth_required") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message, "detail": {"action": "auth_prompt"}},
    )


@dataclass
class AuthContext:
    """Context extracted from a bearer token."""

    user_id: str
    token: str
    payload: JWTPayload

    @property
    def backend_token(self) -> Optional[str]:
        """Token to forward to Supabase; static dev tokens are not forwarded."""
        if self.payload.aud == LOCAL_AUDIENCE:
            return None
        return self.token


def get_auth_context(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
) -> AuthContext:
    """
    Extract and validate the current user from a Bearer token.

    A missing header asks the client to show its sign-in prompt instead of
    performing the requested action.
    """
    if not authorization:
        raise _auth_prompt("Sign in to continue.")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _auth_prompt(
            "Authorization header must be in format: Bearer <token>", error="unauthorized"
        )

    try:
        payload = get_auth_service().validate_token(token)
    except AuthError as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail={"error": exc.error, "message": exc.message, "detail": exc.detail},
        ) from exc

    return AuthContext(user_id=payload.sub, token=token, payload=payload)


__all__ = ["AuthContext", "get_auth_context"]
