"""Search request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Search trigger: free text plus the tags that must all be present."""

    query: str = Field("", max_length=256)
    tags: Optional[list[str]] = Field(
        None, description="Replaces the selected tags when given"
    )


class TagSelection(BaseModel):
    """Request payload to select a tag filter."""

    tag: str = Field(..., max_length=128)


class SearchState(BaseModel):
    """Current search controller state."""

    query: str
    selected_tags: list[str]
    active: bool = Field(..., description="True while results replace the paginated view")
    result_count: Optional[int] = None
    added: Optional[bool] = Field(None, description="Outcome of the last tag selection")


__all__ = ["SearchRequest", "TagSelection", "SearchState"]
