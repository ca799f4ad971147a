"""Entry-related Pydantic models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .notification import Notification
from .tag import TagView

EntryId = Union[int, str]


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """
    Trim tags and drop empties and case-insensitive duplicates.

    Display order is preserved and the first spelling of a tag wins.
    """
    normalized: list[str] = []
    seen: set[str] = set()
    for tag in tags or []:
        cleaned = str(tag).strip()
        if not cleaned:
            continue
        key = cleaned.lower()
        if key in seen:
            continue
        seen.add(key)
        normalized.append(cleaned)
    return normalized


class EntryType(str, Enum):
    """Kind of captured knowledge."""

    TEXT = "TEXT"
    LINK = "LINK"


class Entry(BaseModel):
    """A single row of the entries table."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": 42,
                "title": "Spaced repetition",
                "content": "Reviewing at growing intervals beats cramming.",
                "tags": ["READ", "Research"],
                "type": "TEXT",
                "url": None,
                "created_at": "2025-01-15T14:30:00Z",
            }
        },
    )

    id: EntryId
    title: str = ""
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    type: EntryType = EntryType.TEXT
    url: Optional[str] = None
    created_at: Optional[datetime] = None
    user_id: Optional[str] = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("tags", mode="before")
    @classmethod
    def _none_is_no_tags(cls, value: Optional[list[str]]) -> list[str]:
        return list(value or [])

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Optional[str]) -> str:
        return value or EntryType.TEXT.value


class EntryCreate(BaseModel):
    """Request payload to create an entry."""

    title: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., max_length=1_048_576)
    tags: list[str] = Field(default_factory=list)
    url: Optional[str] = Field(None, max_length=2048)

    @field_validator("content")
    @classmethod
    def _require_content(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Content cannot be empty.")
        return value

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)

    @property
    def entry_type(self) -> EntryType:
        return EntryType.LINK if self.url else EntryType.TEXT

    def to_row(self, user_id: str) -> dict:
        """Column values for the insert request."""
        return {
            "title": (self.title or "").strip(),
            "content": self.content,
            "tags": self.tags,
            "type": self.entry_type.value,
            "url": self.url,
            "user_id": user_id,
        }


class EntryUpdate(BaseModel):
    """Request payload to update an entry (last write wins)."""

    title: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., max_length=1_048_576)
    tags: list[str] = Field(default_factory=list)
    url: Optional[str] = Field(None, max_length=2048)

    @field_validator("content")
    @classmethod
    def _require_content(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Content cannot be empty.")
        return value

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)

    def to_row(self) -> dict:
        row = {
            "title": (self.title or "").strip(),
            "content": self.content,
            "tags": self.tags,
        }
        if self.url is not None:
            row["url"] = self.url or None
            row["type"] = (EntryType.LINK if self.url else EntryType.TEXT).value
        return row


class ShareTarget(BaseModel):
    """Prefill data handed over by the OS share sheet."""

    title: Optional[str] = None
    text: Optional[str] = None
    url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    def to_create(self) -> EntryCreate:
        """Build a create payload; content falls back to the shared URL."""
        return EntryCreate(
            title=self.title or "",
            content=self.text or self.url or "",
            tags=self.tags,
            url=self.url or None,
        )


class CardStyles(BaseModel):
    """Accent classes of an entry card, derived from its first tag."""

    border_color: str
    shadow_color: str
    stripe_color: str


class EntryCard(Entry):
    """Entry plus the values needed to render it."""

    display_title: str
    time_ago: str
    direction: str = Field("ltr", description="Text direction: ltr or rtl")
    tag_views: list[TagView] = Field(default_factory=list)
    card_styles: CardStyles


class PaginationInfo(BaseModel):
    """Page bounds of the paginated entry list."""

    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)
    has_next_page: bool
    has_prev_page: bool
    page_numbers: list[int] = Field(default_factory=list)
    showing_from: int = Field(..., ge=0)
    showing_to: int = Field(..., ge=0)


class EntryListResponse(BaseModel):
    """Entries currently displayed: a page, or search results replacing it."""

    mode: str = Field(..., description="'page' or 'search'")
    entries: list[EntryCard]
    pagination: PaginationInfo
    data_version: int = Field(..., ge=0)
    error: Optional[str] = Field(None, description="Last load error when stale entries are shown")


class EntryMutationResponse(BaseModel):
    """Result of a create/update/delete."""

    entry: Optional[EntryCard] = None
    notification: Notification
    data_version: int = Field(..., ge=0)


__all__ = [
    "EntryId",
    "EntryType",
    "Entry",
    "EntryCreate",
    "EntryUpdate",
    "ShareTarget",
    "CardStyles",
    "EntryCard",
    "PaginationInfo",
    "EntryListResponse",
    "EntryMutationResponse",
    "normalize_tags",
]
