"""HTTP API route handlers."""

from . import auth, entries, insights, reading, search, system

__all__ = ["auth", "entries", "search", "insights", "reading", "system"]
