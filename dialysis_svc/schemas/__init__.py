"""
Pydantic schemas for API request/response validation.

This module contains all Pydantic models used at API boundaries.
"""
from schemas.health_record import (
    HealthRecordCreate,
    HealthRecordResponse,
    RecordAssessment,
    RecordAssessmentRequest,
    BloodPressureStatusResponse,
    RecordFormDefaults,
    TranscriptionResponse,
)
from schemas.medication import (
    FREQUENCY_PRESETS,
    MedicationCreate,
    MedicationResponse,
    FrequencyPresetsResponse,
)
from schemas.profile import (
    ProfileUpdate,
    ProfileResponse,
    StartDateDuration,
    MonthsDuration,
)
from schemas.analysis import SummaryRequest, SummaryResponse
from schemas.reminder import PermissionUpdate, PermissionResponse, NotificationResponse
from schemas.dashboard import DashboardResponse

__all__ = [
    # Health record schemas
    "HealthRecordCreate",
    "HealthRecordResponse",
    "RecordAssessment",
    "RecordAssessmentRequest",
    "BloodPressureStatusResponse",
    "RecordFormDefaults",
    "TranscriptionResponse",
    # Medication schemas
    "FREQUENCY_PRESETS",
    "MedicationCreate",
    "MedicationResponse",
    "FrequencyPresetsResponse",
    # Profile schemas
    "ProfileUpdate",
    "ProfileResponse",
    "StartDateDuration",
    "MonthsDuration",
    # Analysis schemas
    "SummaryRequest",
    "SummaryResponse",
    # Reminder schemas
    "PermissionUpdate",
    "PermissionResponse",
    "NotificationResponse",
    # Dashboard
    "DashboardResponse",
]
