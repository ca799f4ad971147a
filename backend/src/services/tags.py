"""User tag registry and tag color records."""

from __future__ import annotations

import logging
from typing import Iterable

from postgrest import SyncPostgrestClient

from ..models.tag import Tag, TagColor, TagColorUpdate
from .errors import RemoteRequestError
from .supabase_client import TAG_COLORS_TABLE, TAGS_TABLE, run_query

logger = logging.getLogger(__name__)


class TagService:
    """Read and write the tags and tag_colors tables."""

    def __init__(self, client: SyncPostgrestClient) -> None:
        self.client = client

    def list_tags(self) -> list[str]:
        """Tag names of the current user, alphabetically."""
        response = run_query(
            self.client.table(TAGS_TABLE).select("name").order("name"),
            "Load tags",
        )
        return [Tag.model_validate(row).name for row in response.data or [] if row.get("name")]

    def get_tag_colors(self) -> dict[str, TagColor]:
        """
        Map of tag name to its color record.

        Colors are cosmetic: a failed lookup is logged and yields an empty map so
        every tag falls back to the default palette.
        """
        try:
            response = run_query(
                self.client.table(TAG_COLORS_TABLE).select("*"),
                "Load tag colors",
            )
        except RemoteRequestError as exc:
            logger.error("Failed to load tag colors: %s", exc.message)
            return {}

        colors: dict[str, TagColor] = {}
        for row in response.data or []:
            color = TagColor.model_validate(row)
            colors[color.tag_name] = color
        return colors

    def set_tag_color(self, user_id: str, tag_name: str, update: TagColorUpdate) -> TagColor:
        row = {"user_id": user_id, "tag_name": tag_name, **update.model_dump()}
        response = run_query(
            self.client.table(TAG_COLORS_TABLE).upsert(row, on_conflict="user_id,tag_name"),
            "Save tag color",
        )
        rows = response.data or [row]
        logger.info("Saved color for tag %r (user %s)", tag_name, user_id)
        return TagColor.model_validate(rows[0])

    def ensure_tags(self, user_id: str, names: Iterable[str]) -> None:
        """Register tag names used by a saved entry; failures never fail the entry write."""
        rows = [{"user_id": user_id, "name": name} for name in names]
        if not rows:
            return
        try:
            run_query(
                self.client.table(TAGS_TABLE).upsert(
                    rows, on_conflict="user_id,name", ignore_duplicates=True
                ),
                "Register tags",
            )
        except RemoteRequestError as exc:
            logger.warning("Could not register tags %s: %s", [r["name"] for r in rows], exc.message)


__all__ = ["TagService"]
