"""Reading mode and dashboard models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .entry import EntryCard


class ReadingView(BaseModel):
    """One entry of the distraction-free reading mode."""

    entry: EntryCard
    index: int = Field(..., ge=0)
    total: int = Field(..., ge=1)
    position_label: str
    has_next: bool
    has_prev: bool


class DashboardSummary(BaseModel):
    """Numbers shown on the dashboard tiles."""

    entry_count: int = Field(..., ge=0)
    reading_available: bool


__all__ = ["ReadingView", "DashboardSummary"]
