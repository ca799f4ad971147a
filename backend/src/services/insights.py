"""Latest AI analysis lookup."""

from __future__ import annotations

import logging
from typing import Optional

from postgrest import SyncPostgrestClient

from ..models.insight import Insight
from .errors import RemoteRequestError
from .supabase_client import INSIGHTS_TABLE, NO_ROWS_CODE, run_query

logger = logging.getLogger(__name__)


class InsightService:
    """Reads the insights table; generation happens elsewhere."""

    def __init__(self, client: SyncPostgrestClient) -> None:
        self.client = client

    def fetch_latest(self, user_id: str) -> Optional[Insight]:
        """Most recent insight for the user, or None when none was generated yet."""
        builder = (
            self.client.table(INSIGHTS_TABLE)
            .select("content, created_at")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(1)
        )
        try:
            response = run_query(builder, "Fetch latest analysis")
        except RemoteRequestError as exc:
            if exc.code == NO_ROWS_CODE:
                return None
            raise

        rows = response.data or []
        if not rows:
            return None
        return Insight.model_validate(rows[0])


__all__ = ["InsightService"]
