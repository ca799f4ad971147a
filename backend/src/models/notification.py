"""User-facing notification payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Notification(BaseModel):
    """Transient message shown to the user after an action."""

    title: str
    description: str = ""
    variant: Literal["default", "destructive"] = Field("default")

    @classmethod
    def success(cls, title: str, description: str = "") -> "Notification":
        return cls(title=title, description=description)

    @classmethod
    def failure(cls, title: str, description: str = "") -> "Notification":
        return cls(title=title, description=description, variant="destructive")


__all__ = ["Notification"]
