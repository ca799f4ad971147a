"""Entry reads and writes against the Supabase entries table."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from postgrest import SyncPostgrestClient

from ..models.entry import Entry, EntryCreate, EntryId, EntryUpdate
from .errors import EntryNotFoundError
from .supabase_client import ENTRIES_TABLE, run_query

logger = logging.getLogger(__name__)

# Characters with meaning inside a PostgREST logic tree such as or=(...)
POSTGREST_RESERVED = set(',.:()"\\')


def quote_filter_value(value: str) -> str:
    """Double-quote a filter value when it contains PostgREST reserved characters."""
    if not any(char in POSTGREST_RESERVED for char in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_text_filter(query: str) -> str:
    """OR filter matching the query as a case-insensitive substring of title or content."""
    pattern = quote_filter_value(f"%{query}%")
    return f"title.ilike.{pattern},content.ilike.{pattern}"


class EntryStore:
    """Single-request operations on entries; ordering and matching are the backend's."""

    def __init__(self, client: SyncPostgrestClient) -> None:
        self.client = client

    def _table(self):
        return self.client.table(ENTRIES_TABLE)

    def count_entries(self) -> int:
        """Exact number of entries visible to the caller."""
        response = run_query(
            self._table().select("*", count="exact", head=True),
            "Count entries",
        )
        return response.count or 0

    def fetch_page(self, page: int, page_size: int) -> list[Entry]:
        """Rows of a 1-based page, newest first."""
        start = (page - 1) * page_size
        end = start + page_size - 1
        response = run_query(
            self._table()
            .select("*")
            .order("created_at", desc=True)
            .range(start, end),
            "Load entries",
        )
        return [Entry.model_validate(row) for row in response.data or []]

    def fetch_all(self) -> list[Entry]:
        """Every entry, newest first."""
        response = run_query(
            self._table().select("*").order("created_at", desc=True),
            "Load all entries",
        )
        return [Entry.model_validate(row) for row in response.data or []]

    def get_entry(self, entry_id: EntryId) -> Entry:
        response = run_query(
            self._table().select("*").eq("id", entry_id).limit(1),
            "Load entry",
        )
        rows = response.data or []
        if not rows:
            raise EntryNotFoundError(f"Entry not found: {entry_id}")
        return Entry.model_validate(rows[0])

    def search(self, query: str, tags: Sequence[str]) -> list[Entry]:
        """
        Unpaginated search: substring match on title/content AND containment of all tags.

        Either criterion may be empty, but not both (callers clear search instead).
        """
        builder = self._table().select("*").order("created_at", desc=True)
        if query:
            builder = builder.or_(build_text_filter(query))
        if tags:
            builder = builder.contains("tags", list(tags))
        response = run_query(builder, "Search entries", title="Search Error")
        return [Entry.model_validate(row) for row in response.data or []]

    def create_entry(self, payload: EntryCreate, user_id: str) -> Entry:
        response = run_query(
            self._table().insert(payload.to_row(user_id)),
            "Create entry",
        )
        rows = response.data or []
        if not rows:
            # Select policies can hide the inserted row from the caller.
            logger.warning("Created entry for user %s was not returned by the backend", user_id)
            return Entry.model_validate({"id": "", **payload.to_row(user_id)})
        logger.info("Created entry %s for user %s", rows[0].get("id"), user_id)
        return Entry.model_validate(rows[0])

    def update_entry(self, entry_id: EntryId, payload: EntryUpdate) -> Entry:
        response = run_query(
            self._table().update(payload.to_row()).eq("id", entry_id),
            "Update entry",
        )
        rows = response.data or []
        if not rows:
            raise EntryNotFoundError(f"Entry not found: {entry_id}")
        logger.info("Updated entry %s", entry_id)
        return Entry.model_validate(rows[0])

    def delete_entry(self, entry_id: EntryId) -> Optional[Entry]:
        """Delete one entry; returns the removed row when the backend echoes it."""
        response = run_query(
            self._table().delete().eq("id", entry_id),
            "Delete entry",
            title="Deletion Failed",
        )
        rows = response.data or []
        logger.info("Deleted entry %s (%d row(s))", entry_id, len(rows))
        return Entry.model_validate(rows[0]) if rows else None


__all__ = ["EntryStore", "build_text_filter", "quote_filter_value"]
