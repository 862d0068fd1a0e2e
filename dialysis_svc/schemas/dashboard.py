"""
Pydantic schema for the overview page.
"""
from typing import Optional

from pydantic import BaseModel, Field


class DashboardResponse(BaseModel):
    """Latest readings and today's medication progress."""
    patient_name: Optional[str] = None
    profile_missing: bool = Field(..., description="True until the profile form has been saved")
    today: str = Field(..., examples=["2024-05-01"])
    latest_weight: Optional[float] = None
    latest_systolic: Optional[int] = None
    latest_diastolic: Optional[int] = None
    latest_dry_weight: Optional[float] = None
    medications_taken: int = 0
    medications_total: int = 0
