"""
Domain models for the dialysis tracker.

Plain dataclasses that own the storage format (camelCase JSON keys kept
compatible with the original browser storage) and the small amount of
behaviour that belongs to a single entity.
"""
from models.health_record import HealthRecord
from models.medication import Medication
from models.profile import PatientProfile, TreatmentDuration
from models.app_state import AppState, NotificationPermission

__all__ = [
    "HealthRecord",
    "Medication",
    "PatientProfile",
    "TreatmentDuration",
    "AppState",
    "NotificationPermission",
]
