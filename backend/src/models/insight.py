"""Insight (AI analysis) models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NO_ANALYSIS_MESSAGE = "No analysis generated yet. Check back tomorrow!"
ANALYSIS_FAILED_MESSAGE = "Failed to load analysis."


class Insight(BaseModel):
    """AI-generated summary of recent entries."""

    model_config = ConfigDict(extra="ignore")

    content: str
    created_at: Optional[datetime] = None


class AnalysisResponse(BaseModel):
    """Latest analysis as shown in the analysis dialog."""

    status: Literal["ok", "empty", "error"]
    content: str = Field(..., description="Analysis text or a placeholder message")
    created_at: Optional[datetime] = None


__all__ = ["Insight", "AnalysisResponse", "NO_ANALYSIS_MESSAGE", "ANALYSIS_FAILED_MESSAGE"]
