"""
Pydantic schemas for AI health summaries.
"""
from typing import Optional

from pydantic import BaseModel, Field

from core.datetime_utils import MONTH_PATTERN


class SummaryRequest(BaseModel):
    """Which month to summarize; all records when omitted."""
    month: Optional[str] = Field(
        None,
        pattern=MONTH_PATTERN,
        description="YYYY-MM",
        examples=["2024-05"]
    )


class SummaryResponse(BaseModel):
    """Free-text summary. Echoes the request scope so stale replies can be discarded."""
    summary: str
    month: Optional[str] = None
    record_count: int
    generated_at: str = Field(..., description="ISO 8601 local timestamp")
