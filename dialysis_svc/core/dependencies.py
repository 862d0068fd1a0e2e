"""
FastAPI Dependency Injection configuration for the Dialysis Companion API.

This module wires the process-wide singletons (database, state controller,
clock, notification sinks, reminder scheduler) and builds the lightweight
service objects that routers receive through Depends().

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    Service Layer (Business Logic)
         ↓ Injected
    AppStateController (single owner of the state)
         ↓ Injected
    AppStateRepository → Database (SQLite key-value file)

Usage in Routers:
    from core.dependencies import get_record_service

    @router.post("/records")
    async def create_record(
        record: HealthRecordCreate,
        record_service: RecordService = Depends(get_record_service)
    ):
        return record_service.add_record(...)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_record_service] = lambda: test_record_service
"""
import logging
from typing import List, Optional

from core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETONS
# =============================================================================

# Lazy imports below avoid circular dependencies between core and services
_database_instance: Optional["Database"] = None
_controller_instance: Optional["AppStateController"] = None
_clock_instance: Optional["Clock"] = None
_outbox_instance: Optional["NotificationOutbox"] = None
_sink_instance: Optional["NotificationSink"] = None
_scheduler_instance: Optional["ReminderScheduler"] = None
_gemini_instance: Optional["GeminiService"] = None


def get_database() -> "Database":
    """
    Get the database instance (singleton).

    Returns:
        Database: The configured database instance.
    """
    global _database_instance

    if _database_instance is None:
        from repositories.base import Database

        logger.info(f"Initializing database: {settings.database_path}")
        _database_instance = Database(
            db_path=settings.database_path,
            busy_timeout=settings.dialysis_svc_db_busy_timeout
        )
        logger.info("Database initialized successfully")

    return _database_instance


def get_state_repository() -> "AppStateRepository":
    from repositories import AppStateRepository

    return AppStateRepository(db=get_database())


def get_state_controller() -> "AppStateController":
    """
    Get the single AppStateController for this process.

    The state is loaded from the database the first time this is called.
    """
    global _controller_instance

    if _controller_instance is None:
        from services.state_controller import AppStateController

        _controller_instance = AppStateController(repository=get_state_repository())
    return _controller_instance


def get_clock() -> "Clock":
    """Wall clock in the configured timezone (host local zone by default)."""
    global _clock_instance

    if _clock_instance is None:
        from core.datetime_utils import SystemClock

        _clock_instance = SystemClock.from_name(settings.dialysis_svc_timezone)
    return _clock_instance


# =============================================================================
# REMINDER DEPENDENCIES
# =============================================================================

def get_notification_outbox() -> "NotificationOutbox":
    global _outbox_instance

    if _outbox_instance is None:
        from services.reminders import NotificationOutbox

        _outbox_instance = NotificationOutbox(clock=get_clock())
    return _outbox_instance


def get_notification_sink() -> "NotificationSink":
    """
    Get the sink reminders are delivered to.

    Always includes the in-app outbox; adds Telegram when both the token
    and the chat id are configured.
    """
    global _sink_instance

    if _sink_instance is None:
        from services.reminders import CompositeNotificationSink, TelegramNotificationSink

        sinks: List["NotificationSink"] = [get_notification_outbox()]
        if settings.telegram_enabled:
            sinks.append(TelegramNotificationSink(
                token=settings.telegram_token,
                chat_id=settings.telegram_chat_id,
            ))
            logger.info("Telegram reminders enabled")
        _sink_instance = CompositeNotificationSink(sinks)
    return _sink_instance


def get_reminder_scheduler() -> "ReminderScheduler":
    global _scheduler_instance

    if _scheduler_instance is None:
        from services.reminders import ReminderScheduler

        controller = get_state_controller()
        _scheduler_instance = ReminderScheduler(
            clock=get_clock(),
            medications_provider=lambda: controller.medications,
            permission_provider=lambda: controller.notification_permission,
            sink=get_notification_sink(),
        )
    return _scheduler_instance


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_record_service() -> "RecordService":
    """
    Get a RecordService bound to the shared controller and clock.

    Returns:
        RecordService: Service for health record operations.
    """
    from services.record_service import RecordService

    return RecordService(controller=get_state_controller(), clock=get_clock())


def get_medication_service() -> "MedicationService":
    from services.medication_service import MedicationService

    return MedicationService(controller=get_state_controller(), clock=get_clock())


def get_profile_service() -> "ProfileService":
    from services.profile_service import ProfileService

    return ProfileService(controller=get_state_controller(), clock=get_clock())


def get_dashboard_service() -> "DashboardService":
    from services.dashboard_service import DashboardService

    return DashboardService(
        controller=get_state_controller(),
        record_service=get_record_service(),
        medication_service=get_medication_service(),
        clock=get_clock(),
    )


def get_graph_service() -> "GraphService":
    """
    GraphService is stateless and doesn't require state injection.
    """
    from services.graph import GraphService

    return GraphService()


def get_gemini_service() -> "GeminiService":
    """
    Get the GeminiService for summaries and transcription.

    Never raises for a missing key; the service answers with fallbacks.
    """
    global _gemini_instance

    if _gemini_instance is None:
        from services.gemini_service import GeminiService

        _gemini_instance = GeminiService(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
        )
    return _gemini_instance


# =============================================================================
# RESET HELPERS (FOR TESTING)
# =============================================================================

def reset_dependencies() -> None:
    """
    Drop every cached singleton (for testing only).

    The next call to any getter rebuilds it from the current settings.
    """
    global _database_instance, _controller_instance, _clock_instance
    global _outbox_instance, _sink_instance, _scheduler_instance, _gemini_instance
    _database_instance = None
    _controller_instance = None
    _clock_instance = None
    _outbox_instance = None
    _sink_instance = None
    _scheduler_instance = None
    _gemini_instance = None
