"""
Core module for application configuration, logging, and shared constants.

This module provides:
- Settings: Application configuration via pydantic-settings
- Dependency injection: FastAPI Depends() functions for services
- Exceptions: Domain-specific exception classes with HTTP status codes
- Datetime utilities: injectable clocks and date/minute formatting
"""
from core.config import settings, Settings

# Dependency injection - import functions for FastAPI Depends()
from core.dependencies import (
    get_database,
    get_state_repository,
    get_state_controller,
    get_clock,
    get_notification_outbox,
    get_notification_sink,
    get_reminder_scheduler,
    get_record_service,
    get_medication_service,
    get_profile_service,
    get_dashboard_service,
    get_graph_service,
    get_gemini_service,
    reset_dependencies,
)

# Exception classes for consistent error handling
from core.exceptions import (
    DialysisServiceError,
    InvalidRecordDataError,
    InvalidProfileDataError,
    MedicationNotFoundError,
    ProfileNotFoundError,
    StorageError,
    InvalidAudioError,
    UnsupportedAudioTypeError,
    AudioTooLargeError,
    setup_exception_handlers,
)

from core.datetime_utils import (
    Clock,
    SystemClock,
    FixedClock,
    format_minute,
    format_date,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    # Dependency injection
    "get_database",
    "get_state_repository",
    "get_state_controller",
    "get_clock",
    "get_notification_outbox",
    "get_notification_sink",
    "get_reminder_scheduler",
    "get_record_service",
    "get_medication_service",
    "get_profile_service",
    "get_dashboard_service",
    "get_graph_service",
    "get_gemini_service",
    "reset_dependencies",
    # Exceptions
    "DialysisServiceError",
    "InvalidRecordDataError",
    "InvalidProfileDataError",
    "MedicationNotFoundError",
    "ProfileNotFoundError",
    "StorageError",
    "InvalidAudioError",
    "UnsupportedAudioTypeError",
    "AudioTooLargeError",
    "setup_exception_handlers",
    # Datetime utilities
    "Clock",
    "SystemClock",
    "FixedClock",
    "format_minute",
    "format_date",
]
