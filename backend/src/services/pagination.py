"""Paginated entry list controller."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from ..models.entry import Entry, PaginationInfo
from .config import DEFAULT_PAGE_SIZE
from .errors import RemoteRequestError

if TYPE_CHECKING:
    from .entries import EntryStore

logger = logging.getLogger(__name__)

MAX_VISIBLE_PAGES = 5


class EntryPaginator:
    """
    Offset/limit pagination over the entries table.

    Each load requests the exact count and then one page slice. A load is
    skipped while the data version and page are unchanged since the last
    successful load. The current page is not clamped when the total shrinks;
    the backend's (possibly empty) slice is shown as is.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.current_page = 1
        self.total_count = 0
        self.entries: list[Entry] = []
        self.error: Optional[RemoteRequestError] = None
        self._loaded_key: Optional[tuple[int, int]] = None

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    @property
    def is_loaded(self) -> bool:
        return self._loaded_key is not None

    def load(self, store: "EntryStore", data_version: int) -> list[Entry]:
        """Fetch count and current page unless cached for this data version."""
        key = (data_version, self.current_page)
        if key == self._loaded_key and self.error is None:
            return self.entries

        try:
            self.total_count = store.count_entries()
            self.entries = store.fetch_page(self.current_page, self.page_size)
            self.error = None
            self._loaded_key = key
        except RemoteRequestError as exc:
            logger.error("Error loading entries (page %d): %s", self.current_page, exc.message)
            self.error = exc
        return self.entries

    def go_to_page(self, page: int) -> bool:
        """Move to a page within [1, total_pages]; anything else is ignored."""
        if 1 <= page <= self.total_pages:
            changed = page != self.current_page
            self.current_page = page
            return changed
        return False

    def next_page(self) -> bool:
        return self.go_to_page(self.current_page + 1)

    def prev_page(self) -> bool:
        return self.go_to_page(self.current_page - 1)

    def page_numbers(self, max_visible: int = MAX_VISIBLE_PAGES) -> list[int]:
        """Page buttons to render around the current page."""
        if self.total_pages <= max_visible:
            return list(range(1, self.total_pages + 1))
        start = max(1, self.current_page - 2)
        end = min(self.total_pages, start + max_visible - 1)
        return list(range(start, end + 1))

    def showing_range(self) -> tuple[int, int]:
        """1-based positions of the first and last entry on the current page."""
        if self.total_count == 0:
            return 0, 0
        first = (self.current_page - 1) * self.page_size + 1
        last = min(self.current_page * self.page_size, self.total_count)
        return first, last

    def info(self) -> PaginationInfo:
        showing_from, showing_to = self.showing_range()
        return PaginationInfo(
            current_page=self.current_page,
            page_size=self.page_size,
            total_pages=self.total_pages,
            total_count=self.total_count,
            has_next_page=self.has_next_page,
            has_prev_page=self.has_prev_page,
            page_numbers=self.page_numbers(),
            showing_from=showing_from,
            showing_to=showing_to,
        )


__all__ = ["EntryPaginator", "MAX_VISIBLE_PAGES"]
