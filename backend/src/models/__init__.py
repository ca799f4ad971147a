"""Pydantic models for data validation and serialization."""

from .auth import CurrentUser, JWTPayload
from .entry import (
    CardStyles,
    Entry,
    EntryCard,
    EntryCreate,
    EntryListResponse,
    EntryMutationResponse,
    EntryType,
    EntryUpdate,
    PaginationInfo,
    ShareTarget,
    normalize_tags,
)
from .insight import AnalysisResponse, Insight
from .notification import Notification
from .reading import DashboardSummary, ReadingView
from .search import SearchRequest, SearchState, TagSelection
from .tag import Tag, TagColor, TagColorUpdate, TagListResponse, TagView

__all__ = [
    "CurrentUser",
    "JWTPayload",
    "Entry",
    "EntryType",
    "EntryCreate",
    "EntryUpdate",
    "ShareTarget",
    "CardStyles",
    "EntryCard",
    "PaginationInfo",
    "EntryListResponse",
    "EntryMutationResponse",
    "normalize_tags",
    "Insight",
    "AnalysisResponse",
    "Notification",
    "ReadingView",
    "DashboardSummary",
    "SearchRequest",
    "SearchState",
    "TagSelection",
    "Tag",
    "TagColor",
    "TagColorUpdate",
    "TagView",
    "TagListResponse",
]
