"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE_SIZE = 24
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:5173")


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (backend client is unavailable when unset)",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase anon/public API key",
    )
    supabase_jwt_secret: Optional[str] = Field(
        default=None,
        description="Project JWT secret for local access-token verification (optional)",
    )
    enable_local_mode: bool = Field(
        default=True,
        description="Allow local-dev token bypass when running locally",
    )
    local_dev_token: Optional[str] = Field(
        default="local-dev-token",
        description="Static token accepted in local mode for development",
    )
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=500)
    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS)

    @field_validator("supabase_url", mode="before")
    @classmethod
    def _normalize_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            return None
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("SUPABASE_URL must start with http:// or https://")
        return cleaned

    @field_validator("supabase_key", mode="before")
    @classmethod
    def _blank_key_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("supabase_jwt_secret", mode="before")
    @classmethod
    def _ensure_secret(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            raise ValueError(
                "SUPABASE_JWT_SECRET cannot be empty; unset the variable to verify tokens remotely"
            )
        if len(cleaned) < 16:
            raise ValueError("SUPABASE_JWT_SECRET must be at least 16 characters")
        return cleaned

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | tuple[str, ...] | list[str] | None) -> tuple[str, ...]:
        if value is None:
            return DEFAULT_CORS_ORIGINS
        if isinstance(value, str):
            value = value.split(",")
        return tuple(origin.strip() for origin in value if origin and origin.strip())

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    enable_local_mode = _read_env("ENABLE_LOCAL_MODE", "true").lower() not in {
        "0",
        "false",
        "no",
    }

    return AppConfig(
        supabase_url=_read_env("SUPABASE_URL"),
        supabase_key=_read_env("SUPABASE_KEY"),
        supabase_jwt_secret=_read_env("SUPABASE_JWT_SECRET"),
        enable_local_mode=enable_local_mode,
        local_dev_token=_read_env("LOCAL_DEV_TOKEN", "local-dev-token"),
        page_size=int(_read_env("PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
        cors_origins=_read_env("CORS_ORIGINS"),
    )


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "DEFAULT_PAGE_SIZE",
]
