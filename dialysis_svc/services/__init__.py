"""
Service layer for business logic.

This module contains all business logic and orchestration services.

Note: Some services are not re-exported here to avoid pulling heavy
third-party clients in on every import. Import them directly from their modules:
- from services.gemini_service import GeminiService
- from services.graph import GraphService
- from services.reminders import ReminderScheduler
"""
from services.dashboard_service import DashboardService
from services.medication_service import MedicationService
from services.profile_service import ProfileService
from services.record_service import RecordService
from services.state_controller import AppStateController

__all__ = [
    "AppStateController",
    "DashboardService",
    "MedicationService",
    "ProfileService",
    "RecordService",
]
