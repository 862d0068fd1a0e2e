"""
Pydantic schemas for health record-related API operations.
"""
import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Draft form values may still be raw text while the patient is typing
DraftValue = Union[float, str, None]


class HealthRecordCreate(BaseModel):
    """Schema for creating a new health record.

    One entry per dialysis session or daily weigh-in. Weight and dry weight
    are required; fluid removal and notes are optional.
    """
    date: datetime.date = Field(
        ...,
        description="Calendar day of the measurement (YYYY-MM-DD); must not be in the future",
        examples=["2024-05-01"]
    )
    weight: float = Field(..., gt=0, le=500, description="Body weight in kg", examples=[62.4])
    dry_weight: float = Field(..., gt=0, le=500, description="Clinician-set dry weight in kg", examples=[60.0])
    fluid_removal: Optional[float] = Field(
        None,
        ge=0,
        le=50,
        description="Fluid removed during the session in kg/L (optional)",
        examples=[2.5]
    )
    systolic: int = Field(..., gt=0, le=300, description="Systolic pressure in mmHg", examples=[135])
    diastolic: int = Field(..., gt=0, le=250, description="Diastolic pressure in mmHg", examples=[85])
    notes: Optional[str] = Field(None, max_length=2000, description="Free-text notes", examples=["Mild cramps after session"])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2024-05-01",
                "weight": 62.4,
                "dry_weight": 60.0,
                "fluid_removal": 2.5,
                "systolic": 135,
                "diastolic": 85,
                "notes": "Mild cramps after session"
            }
        }
    )


class RecordAssessmentRequest(BaseModel):
    """Draft values from the entry form, evaluated before the record is saved.

    Values may be numbers, numeric strings, empty strings or missing.
    """
    dry_weight: DraftValue = Field(None, examples=["60"])
    fluid_removal: DraftValue = Field(None, examples=["3.2"])
    systolic: DraftValue = Field(None, examples=["145"])
    diastolic: DraftValue = Field(None, examples=["88"])


class BloodPressureStatusResponse(BaseModel):
    """The single active blood-pressure finding."""
    kind: str = Field(..., description="'danger' for hypotension, 'warning' for hypertension", examples=["warning"])
    message: str = Field(..., examples=["High blood pressure"])
    detail: str = Field(..., examples=["Systolic above 140 or diastolic above 90 is considered high."])
    systolic_limit: Optional[int] = Field(None, description="Hypertension systolic limit used", examples=[140])
    diastolic_limit: Optional[int] = Field(None, description="Hypertension diastolic limit used", examples=[90])


class RecordAssessment(BaseModel):
    """Threshold flags for one record (or draft)."""
    fluid_removal_ratio: Optional[float] = Field(None, description="Fluid removal / dry weight", examples=[0.053])
    fluid_warning: bool = Field(False, description="True when removal exceeds 5% of dry weight")
    fluid_warning_message: Optional[str] = None
    blood_pressure: Optional[BloodPressureStatusResponse] = None
    age_hint: Optional[str] = Field(
        None,
        description="Shown when the profile has no age and adult limits were assumed"
    )


class HealthRecordResponse(BaseModel):
    """Schema for health record response, including its threshold assessment."""
    id: str = Field(..., examples=["3f9a0c2e5b8d4e0f9a1b2c3d4e5f6a7b"])
    date: str = Field(..., description="YYYY-MM-DD", examples=["2024-05-01"])
    weight: float = Field(..., examples=[62.4])
    dry_weight: float = Field(..., examples=[60.0])
    fluid_removal: Optional[float] = Field(None, examples=[2.5])
    systolic: int = Field(..., examples=[135])
    diastolic: int = Field(..., examples=[85])
    notes: Optional[str] = None
    assessment: RecordAssessment


class RecordFormDefaults(BaseModel):
    """Prefill values for a new entry form."""
    date: str = Field(..., description="Today's date (YYYY-MM-DD)", examples=["2024-05-01"])
    dry_weight: Optional[float] = Field(None, description="Dry weight of the most recent record", examples=[60.0])
    patient_age: Optional[int] = Field(None, examples=[70])


class TranscriptionResponse(BaseModel):
    """Text recognised from a voice note; empty when transcription was unavailable."""
    text: str = Field(..., examples=["Felt dizzy after the session, had a light dinner"])
    mime_type: str = Field(..., examples=["audio/webm"])
