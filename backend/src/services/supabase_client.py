"""Supabase client construction and request execution helpers."""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Any, Optional

import httpx
from postgrest import SyncPostgrestClient
from postgrest.constants import DEFAULT_POSTGREST_CLIENT_HEADERS
from postgrest.exceptions import APIError
from supabase import Client, create_client

from .config import AppConfig, get_config
from .errors import RemoteRequestError

logger = logging.getLogger(__name__)

ENTRIES_TABLE = "entries"
INSIGHTS_TABLE = "insights"
TAGS_TABLE = "tags"
TAG_COLORS_TABLE = "tag_colors"

REST_PATH = "/rest/v1"

# PostgREST error code for "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"


@lru_cache(maxsize=4)
def _shared_client(url: str, key: str) -> Client:
    return create_client(url, key)


def get_supabase_client(config: AppConfig | None = None) -> Optional[Client]:
    """
    Process-wide Supabase client for Auth lookups, or None when unconfigured.

    It carries only the anon key and is never authorised as a user, so it is
    safe to share between requests.
    """
    config = config or get_config()
    if not config.backend_configured:
        return None
    return _shared_client(config.supabase_url, config.supabase_key)


def open_postgrest_client(
    access_token: Optional[str] = None,
    config: AppConfig | None = None,
) -> Optional[SyncPostgrestClient]:
    """
    Open a PostgREST client for one request, or return None when unconfigured.

    With an access token the requests run as that user so row-level security
    applies; without one they use the anon key. Close it with
    ``close_postgrest_client`` once the request is done.
    """
    config = config or get_config()
    if not config.backend_configured:
        return None

    headers = {
        **DEFAULT_POSTGREST_CLIENT_HEADERS,
        "apikey": config.supabase_key,
        "Authorization": f"Bearer {access_token or config.supabase_key}",
    }
    return SyncPostgrestClient(f"{config.supabase_url}{REST_PATH}", headers=headers)


def close_postgrest_client(client: SyncPostgrestClient) -> None:
    """Release the connection pool of a per-request client."""
    client.session.close()


def run_query(builder: Any, action: str, *, title: str = "An Error Occurred") -> Any:
    """
    Execute a query builder once and translate backend failures.

    Raises RemoteRequestError carrying the notification title of the call site.
    """
    try:
        return builder.execute()
    except APIError as exc:
        logger.error("%s failed (code=%s): %s", action, exc.code, exc.message)
        raise RemoteRequestError(
            exc.message or f"{action} failed",
            code=exc.code,
            title=title,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("%s failed: %s", action, exc)
        raise RemoteRequestError(f"{action} failed: {exc}", title=title) from exc


__all__ = [
    "get_supabase_client",
    "open_postgrest_client",
    "close_postgrest_client",
    "run_query",
    "ENTRIES_TABLE",
    "INSIGHTS_TABLE",
    "TAGS_TABLE",
    "TAG_COLORS_TABLE",
    "NO_ROWS_CODE",
]
