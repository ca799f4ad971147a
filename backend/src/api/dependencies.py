"""Request-scoped dependencies shared by the route modules."""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends
from postgrest import SyncPostgrestClient

from .middleware import AuthContext, get_auth_context
from ..services.entries import EntryStore
from ..services.errors import ConfigurationError
from ..services.insights import InsightService
from ..services.sessions import VaultSession, get_session_registry
from ..services.supabase_client import close_postgrest_client, open_postgrest_client
from ..services.tags import TagService


def get_supabase(
    auth: AuthContext = Depends(get_auth_context),
) -> Iterator[SyncPostgrestClient]:
    """PostgREST client acting on behalf of the authenticated user, closed after the request."""
    client = open_postgrest_client(access_token=auth.backend_token)
    if client is None:
        raise ConfigurationError()
    try:
        yield client
    finally:
        close_postgrest_client(client)


def get_entry_store(client: SyncPostgrestClient = Depends(get_supabase)) -> EntryStore:
    return EntryStore(client)


def get_tag_service(client: SyncPostgrestClient = Depends(get_supabase)) -> TagService:
    return TagService(client)


def get_insight_service(client: SyncPostgrestClient = Depends(get_supabase)) -> InsightService:
    return InsightService(client)


def get_vault_session(auth: AuthContext = Depends(get_auth_context)) -> VaultSession:
    return get_session_registry().get(auth.user_id)


__all__ = [
    "get_supabase",
    "get_entry_store",
    "get_tag_service",
    "get_insight_service",
    "get_vault_session",
]
