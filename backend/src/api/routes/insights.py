"""HTTP API routes for the latest AI analysis."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_insight_service
from ..middleware import AuthContext, get_auth_context
from ...models.insight import ANALYSIS_FAILED_MESSAGE, NO_ANALYSIS_MESSAGE, AnalysisResponse
from ...services.errors import RemoteRequestError
from ...services.insights import InsightService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/insights/latest", response_model=AnalysisResponse)
def get_latest_analysis(
    auth: AuthContext = Depends(get_auth_context),
    service: InsightService = Depends(get_insight_service),
):
    """
    Most recent analysis for the signed-in user.

    A failed lookup is reported inside the dialog payload rather than as an
    HTTP error.
    """
    try:
        insight = service.fetch_latest(auth.user_id)
    except RemoteRequestError as exc:
        logger.error("Failed to load analysis for %s: %s", auth.user_id, exc.message)
        return AnalysisResponse(status="error", content=ANALYSIS_FAILED_MESSAGE)

    if insight is None:
        return AnalysisResponse(status="empty", content=NO_ANALYSIS_MESSAGE)
    return AnalysisResponse(status="ok", content=insight.content, created_at=insight.created_at)


__all__ = ["router"]
