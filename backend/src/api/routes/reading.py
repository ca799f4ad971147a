"""HTTP API routes for the dashboard and reading mode."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_entry_store, get_tag_service
from ...models.reading import DashboardSummary, ReadingView
from ...services.display import build_entry_card
from ...services.entries import EntryStore
from ...services.errors import EntryNotFoundError
from ...services.reading_mode import ReadingSession
from ...services.tags import TagService

router = APIRouter()


@router.get("/api/dashboard", response_model=DashboardSummary)
def get_dashboard(store: EntryStore = Depends(get_entry_store)):
    count = store.count_entries()
    return DashboardSummary(entry_count=count, reading_available=count > 0)


@router.get("/api/reading", response_model=ReadingView)
def get_reading_view(
    index: int = Query(0, ge=0, description="Zero-based position, newest first"),
    store: EntryStore = Depends(get_entry_store),
    tag_service: TagService = Depends(get_tag_service),
):
    """One entry at a time, newest first, with its position in the vault."""
    reading = ReadingSession(store.fetch_all(), index)
    entry = reading.current
    if entry is None:
        raise EntryNotFoundError(f"No entry at position {index + 1}.")

    return ReadingView(
        entry=build_entry_card(entry, tag_service.get_tag_colors()),
        index=reading.index,
        total=len(reading.entries),
        position_label=reading.position_label,
        has_next=reading.has_next,
        has_prev=reading.has_prev,
    )


__all__ = ["router"]
