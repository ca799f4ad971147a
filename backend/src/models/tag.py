"""Tag and tag color models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    """A user-scoped tag name."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    user_id: Optional[str] = None


class TagColor(BaseModel):
    """User-defined utility class triple for a tag."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "tag_name": "A.I",
                "background_color": "bg-purple-500/10",
                "border_color": "border-purple-500/20",
                "text_color": "text-purple-400",
            }
        },
    )

    tag_name: str = Field(..., min_length=1)
    background_color: str
    border_color: str
    text_color: str


class TagColorUpdate(BaseModel):
    """Request payload to set a tag's colors."""

    background_color: str = Field(..., min_length=1, max_length=128)
    border_color: str = Field(..., min_length=1, max_length=128)
    text_color: str = Field(..., min_length=1, max_length=128)


class TagView(BaseModel):
    """Tag name with its resolved display classes."""

    name: str
    classes: str


class TagListResponse(BaseModel):
    """All known tags plus picker suggestions."""

    tags: list[TagView]
    suggestions: list[str] = Field(
        default_factory=list,
        description="Tags matching the filter that are not selected in search",
    )


__all__ = ["Tag", "TagColor", "TagColorUpdate", "TagView", "TagListResponse"]
