"""Service layer for business logic and external integrations."""

from .auth import AuthError, AuthService, get_auth_service
from .config import AppConfig, get_config, reload_config
from .display import build_entry_card, text_direction, time_ago
from .entries import EntryStore
from .errors import (
    ConfigurationError,
    ConfirmationRequiredError,
    EntryNotFoundError,
    RemoteRequestError,
    VaultError,
)
from .insights import InsightService
from .pagination import EntryPaginator
from .reading_mode import ReadingSession
from .search import SearchController
from .sessions import SessionRegistry, VaultSession, get_session_registry
from .supabase_client import (
    close_postgrest_client,
    get_supabase_client,
    open_postgrest_client,
    run_query,
)
from .tag_colors import get_card_styles, get_tag_color_classes
from .tags import TagService

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "AuthService",
    "AuthError",
    "get_auth_service",
    "get_supabase_client",
    "open_postgrest_client",
    "close_postgrest_client",
    "run_query",
    "VaultError",
    "ConfigurationError",
    "RemoteRequestError",
    "EntryNotFoundError",
    "ConfirmationRequiredError",
    "EntryStore",
    "EntryPaginator",
    "SearchController",
    "TagService",
    "InsightService",
    "ReadingSession",
    "VaultSession",
    "SessionRegistry",
    "get_session_registry",
    "get_tag_color_classes",
    "get_card_styles",
    "build_entry_card",
    "text_direction",
    "time_ago",
]
