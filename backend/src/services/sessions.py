"""Per-user view state: data version, paginated list and search form."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
import logging
from typing import Optional

from .config import get_config
from .pagination import EntryPaginator
from .search import SearchController

logger = logging.getLogger(__name__)

MAX_SESSIONS = 1000


@dataclass
class VaultSession:
    """
    View state of one user.

    ``data_version`` increases after every successful write; cached pages are
    only reused while it is unchanged.
    """

    user_id: str
    paginator: EntryPaginator
    search: SearchController = field(default_factory=SearchController)
    data_version: int = 0

    def mark_changed(self) -> int:
        self.data_version += 1
        return self.data_version


class SessionRegistry:
    """
    In-process map of user id to session, bounded to the most recently used.

    An evicted user starts again on page 1 with an empty search form.
    """

    def __init__(self, page_size: int, max_sessions: int = MAX_SESSIONS) -> None:
        self.page_size = page_size
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, VaultSession] = OrderedDict()

    def get(self, user_id: str) -> VaultSession:
        session = self._sessions.get(user_id)
        if session is not None:
            self._sessions.move_to_end(user_id)
            return session

        session = VaultSession(user_id=user_id, paginator=EntryPaginator(self.page_size))
        self._sessions[user_id] = session
        logger.debug("Created view session for user %s", user_id)
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("Evicted view session for user %s", evicted)
        return session

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions


_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    """Get or create the session registry singleton."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry(page_size=get_config().page_size)
    return _registry


def reset_session_registry() -> None:
    """Drop all sessions (tests and config reloads)."""
    global _registry
    _registry = None


__all__ = [
    "VaultSession",
    "SessionRegistry",
    "get_session_registry",
    "reset_session_registry",
]
