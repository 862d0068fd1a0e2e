"""
Pydantic schemas for medication-related API operations.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.datetime_utils import is_valid_reminder_time

FREQUENCY_PRESETS: List[str] = [
    "Once daily",
    "Twice daily",
    "Three times daily",
    "With meals on dialysis days",
    "At bedtime",
]


class MedicationCreate(BaseModel):
    """Schema for adding a medication.

    `frequency` is a free-text label; the presets are suggestions only.
    `reminder_time` is a 24h HH:MM; leave it empty for no reminder.
    """
    name: str = Field(..., min_length=1, max_length=200, examples=["Calcium carbonate"])
    dosage: str = Field(..., min_length=1, max_length=100, examples=["1 tablet"])
    frequency: str = Field(FREQUENCY_PRESETS[0], min_length=1, max_length=100, examples=["Once daily"])
    reminder_time: Optional[str] = Field(None, description="Daily reminder time, HH:MM (24h)", examples=["08:00"])

    @field_validator("name", "dosage", "frequency")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("reminder_time")
    @classmethod
    def validate_reminder_time(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if not is_valid_reminder_time(value):
            raise ValueError("reminder_time must be HH:MM in 24-hour format")
        return value


class MedicationResponse(BaseModel):
    """Schema for a medication with its taken state resolved for today."""
    id: str
    name: str
    dosage: str
    frequency: str
    reminder_time: Optional[str] = None
    taken_today: bool = Field(..., description="Marked taken on today's date")
    last_taken_date: Optional[str] = Field(None, description="YYYY-MM-DD of the last time it was marked taken")


class FrequencyPresetsResponse(BaseModel):
    frequencies: List[str]
