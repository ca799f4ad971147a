"""Authentication helpers (static dev token, Supabase JWT, Supabase user lookup)."""

from __future__ import annotations

import abc
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

import httpx
import jwt
from fastapi import status
from supabase import AuthApiError, AuthRetryableError

from ..models.auth import JWTPayload
from .config import AppConfig, get_config
from .errors import RemoteRequestError
from .supabase_client import get_supabase_client

logger = logging.getLogger(__name__)

LOCAL_AUDIENCE = "local"
SUPABASE_AUDIENCE = "authenticated"


class AuthError(Exception):
    """Domain-specific authentication error."""

    def __init__(
        self,
        error: str,
        message: str,
        *,
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        detail: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.detail = detail or {}


class TokenValidator(abc.ABC):
    """Abstract base class for token validation strategies."""

    @abc.abstractmethod
    def validate(self, token: str) -> Optional[JWTPayload]:
        """
        Validate the token and return payload if valid, or None if this validator
        does not recognize the token (allow fallthrough).
        Raises AuthError if token is recognized but invalid/expired.
        """


class StaticTokenValidator(TokenValidator):
    """Validates against a configured static token (local development)."""

    def __init__(self, static_token: Optional[str], user_id: str):
        self.static_token = static_token
        self.user_id = user_id

    def validate(self, token: str) -> Optional[JWTPayload]:
        if self.static_token and token == self.static_token:
            now = datetime.now(timezone.utc)
            return JWTPayload(
                sub=self.user_id,
                aud=LOCAL_AUDIENCE,
                iat=int(now.timestamp()),
                exp=int((now + timedelta(days=365)).timestamp()),
            )
        return None


class SupabaseJWTValidator(TokenValidator):
    """Verifies Supabase access tokens locally with the project JWT secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def validate(self, token: str) -> Optional[JWTPayload]:
        try:
            decoded = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=SUPABASE_AUDIENCE,
            )
            return JWTPayload(**decoded)
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("token_expired", "Token expired") from exc
        except jwt.DecodeError:
            # Not a JWT (or signed elsewhere); let the remote lookup decide
            return None
        except jwt.InvalidTokenError as exc:
            raise AuthError("invalid_token", f"Invalid token: {exc}") from exc


def _auth_unavailable(exc: Exception) -> RemoteRequestError:
    logger.error("Supabase user lookup failed: %s", exc)
    return RemoteRequestError(
        "Could not reach the authentication service. Please try again.",
        title="Authentication Unavailable",
    )


class SupabaseUserValidator(TokenValidator):
    """Resolves the current user by asking Supabase Auth about the token."""

    def __init__(self, client_factory: Callable[[], Any]):
        self.client_factory = client_factory

    def validate(self, token: str) -> Optional[JWTPayload]:
        client = self.client_factory()
        if client is None:
            raise AuthError(
                "configuration_error",
                "Please configure Supabase in settings first.",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        try:
            response = client.auth.get_user(token)
        except (AuthRetryableError, httpx.HTTPError) as exc:
            raise _auth_unavailable(exc) from exc
        except AuthApiError as exc:
            # 5xx: Auth itself is failing
            if (exc.status or 0) >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                raise _auth_unavailable(exc) from exc
            logger.warning("Supabase user lookup rejected token: %s", exc)
            raise AuthError("invalid_token", "Invalid authentication credentials") from exc

        user = getattr(response, "user", None)
        if user is None:
            raise AuthError("invalid_token", "Invalid authentication credentials")
        return JWTPayload(
            sub=str(user.id),
            email=getattr(user, "email", None),
            role=getattr(user, "role", None),
            aud=getattr(user, "aud", None) or SUPABASE_AUDIENCE,
        )


class AuthService:
    """Validate bearer tokens using the configured strategies, in order."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        client_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.config = config or get_config()

        self.validators: List[TokenValidator] = []

        # 1. Local Dev Token (Highest priority)
        if self.config.enable_local_mode:
            self.validators.append(
                StaticTokenValidator(self.config.local_dev_token, "local-dev")
            )

        # 2. Local JWT verification when the project secret is known
        if self.config.supabase_jwt_secret:
            self.validators.append(SupabaseJWTValidator(self.config.supabase_jwt_secret))

        # 3. Remote user lookup
        self.validators.append(
            SupabaseUserValidator(
                client_factory or (lambda: get_supabase_client(config=self.config))
            )
        )

    def validate_token(self, token: str) -> JWTPayload:
        """
        Validate a token against all registered strategies.
        Returns the first successful payload.
        Raises AuthError if no validator accepts it or if validation explicitly fails.
        """
        for validator in self.validators:
            payload = validator.validate(token)
            if payload:
                return payload

        raise AuthError("invalid_token", "Invalid authentication credentials")


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    """Get or create the auth service for the current configuration."""
    return AuthService()


__all__ = [
    "AuthService",
    "AuthError",
    "TokenValidator",
    "StaticTokenValidator",
    "SupabaseJWTValidator",
    "SupabaseUserValidator",
    "get_auth_service",
    "LOCAL_AUDIENCE",
]
