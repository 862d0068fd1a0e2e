"""
Pydantic schemas for the patient profile.
"""
from datetime import date
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field
from typing_extensions import Annotated


class StartDateDuration(BaseModel):
    """Time on dialysis derived from the date treatment started."""
    kind: Literal["start_date"] = "start_date"
    start_date: date = Field(..., examples=["2023-01-15"])


class MonthsDuration(BaseModel):
    """Time on dialysis entered directly as a month count."""
    kind: Literal["months"] = "months"
    months: int = Field(..., ge=0, le=1200, examples=[14])


TreatmentDurationInput = Annotated[
    Union[StartDateDuration, MonthsDuration],
    Field(discriminator="kind"),
]


class ProfileUpdate(BaseModel):
    """Schema for creating or replacing the patient profile."""
    name: str = Field(..., min_length=1, max_length=200, examples=["Li Wei"])
    age: int = Field(..., ge=1, le=120, description="Used to choose blood pressure limits", examples=[68])
    treatment_duration: Optional[TreatmentDurationInput] = Field(
        None,
        description="Either a start date or a direct month count (optional)"
    )


class ProfileResponse(BaseModel):
    """Profile with time on treatment resolved as of today."""
    name: str
    age: int
    treatment_duration: Optional[TreatmentDurationInput] = None
    months_on_treatment: Optional[int] = Field(None, examples=[14])
    duration_text: Optional[str] = Field(None, examples=["1 year 2 months"])
    duration_error: Optional[str] = Field(
        None,
        description="Set instead of months_on_treatment when the start date is after today"
    )
