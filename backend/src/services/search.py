"""Search controller: text and tag filters that replace the paginated view."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from ..models.entry import Entry
from ..models.search import SearchState

if TYPE_CHECKING:
    from .entries import EntryStore

logger = logging.getLogger(__name__)


class SearchController:
    """Holds the search form state and the last result set (None = not searching)."""

    def __init__(self) -> None:
        self.query = ""
        self.selected_tags: list[str] = []
        self.results: Optional[list[Entry]] = None

    @property
    def is_active(self) -> bool:
        return self.results is not None

    @property
    def is_empty(self) -> bool:
        return not self.query.strip() and not self.selected_tags

    def add_tag(self, tag: str) -> bool:
        """Select a tag filter; empty names and case-insensitive repeats are rejected."""
        cleaned = tag.strip()
        if not cleaned:
            return False
        if any(existing.lower() == cleaned.lower() for existing in self.selected_tags):
            return False
        self.selected_tags.append(cleaned)
        return True

    def remove_tag(self, tag: str) -> bool:
        if tag not in self.selected_tags:
            return False
        self.selected_tags = [existing for existing in self.selected_tags if existing != tag]
        return True

    def set_tags(self, tags: Iterable[str]) -> None:
        self.selected_tags = []
        for tag in tags:
            self.add_tag(tag)

    def clear(self) -> None:
        """Reset the form and return to the paginated view."""
        self.query = ""
        self.selected_tags = []
        self.results = None

    def filtered_tags(self, all_tags: Iterable[str], needle: str = "") -> list[str]:
        """Known tags containing the needle (case-insensitive) that are not selected yet."""
        lowered = needle.lower()
        return [
            tag
            for tag in all_tags
            if lowered in tag.lower() and tag not in self.selected_tags
        ]

    def run(self, store: "EntryStore") -> Optional[list[Entry]]:
        """
        Execute the search once.

        An empty query with no tags clears the search and returns None. Remote
        failures propagate and leave the previous results in place.
        """
        if self.is_empty:
            self.clear()
            return None

        query = self.query.strip()
        results = store.search(query, self.selected_tags)
        logger.info(
            "Search matched %d entries (query=%r, tags=%s)",
            len(results),
            query,
            self.selected_tags,
        )
        self.results = results
        return results

    def state(self, *, added: Optional[bool] = None) -> SearchState:
        return SearchState(
            query=self.query,
            selected_tags=list(self.selected_tags),
            active=self.is_active,
            result_count=len(self.results) if self.results is not None else None,
            added=added,
        )


__all__ = ["SearchController"]
