"""
Shared pytest fixtures for API and service tests.

Key patterns:

1. Database Isolation: Each test gets a fresh temporary database
2. Fixed Clock: "today" and the reminder minute come from a FixedClock
3. DI Override: Use app.dependency_overrides to inject test dependencies

Fixture Hierarchy:
    temp_db → state_repo → controller → services → test_app → client
"""
import os
import tempfile
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core import dependencies as deps
from core.datetime_utils import FixedClock
from core.exceptions import setup_exception_handlers
from repositories import AppStateRepository
from repositories.base import Database
from services.dashboard_service import DashboardService
from services.gemini_service import GeminiService
from services.graph import GraphService
from services.medication_service import MedicationService
from services.profile_service import ProfileService
from services.record_service import RecordService
from services.reminders import NotificationOutbox
from services.state_controller import AppStateController

from factories import TEST_NOW


@pytest.fixture
def temp_db():
    """
    Create a temporary database for testing.

    This fixture creates a fresh SQLite database in a temp file,
    ensuring complete isolation between tests.
    """
    fd, db_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    db = Database(db_path=db_path)
    yield db

    # Cleanup (WAL mode leaves side files)
    for path in (db_path, f"{db_path}-wal", f"{db_path}-shm"):
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def state_repo(temp_db):
    return AppStateRepository(db=temp_db)


@pytest.fixture
def clock():
    return FixedClock(TEST_NOW)


@pytest.fixture
def controller(state_repo):
    return AppStateController(repository=state_repo)


@pytest.fixture
def record_service(controller, clock):
    return RecordService(controller=controller, clock=clock)


@pytest.fixture
def medication_service(controller, clock):
    return MedicationService(controller=controller, clock=clock)


@pytest.fixture
def profile_service(controller, clock):
    return ProfileService(controller=controller, clock=clock)


@pytest.fixture
def dashboard_service(controller, record_service, medication_service, clock):
    return DashboardService(
        controller=controller,
        record_service=record_service,
        medication_service=medication_service,
        clock=clock,
    )


@pytest.fixture
def graph_service():
    return GraphService()


@pytest.fixture
def gemini_service():
    """GeminiService without a key: every call answers with its fallback."""
    return GeminiService(api_key="", model_name="gemini-test")


@pytest.fixture
def outbox(clock):
    return NotificationOutbox(clock=clock)


@pytest.fixture
def test_app(temp_db, controller, clock, record_service, medication_service, profile_service,
             dashboard_service, graph_service, gemini_service, outbox):
    """
    Create a FastAPI test app with dependency overrides.

    Uses the real routers and injects test instances via dependency_overrides.
    """
    from api.routers import (
        analysis_router,
        dashboard_router,
        health_router,
        medications_router,
        profile_router,
        records_router,
        reminders_router,
    )

    app = FastAPI(title="Dialysis Companion API Test")

    # Register exception handlers (same as production)
    setup_exception_handlers(app)

    app.dependency_overrides[deps.get_database] = lambda: temp_db
    app.dependency_overrides[deps.get_state_controller] = lambda: controller
    app.dependency_overrides[deps.get_clock] = lambda: clock
    app.dependency_overrides[deps.get_record_service] = lambda: record_service
    app.dependency_overrides[deps.get_medication_service] = lambda: medication_service
    app.dependency_overrides[deps.get_profile_service] = lambda: profile_service
    app.dependency_overrides[deps.get_dashboard_service] = lambda: dashboard_service
    app.dependency_overrides[deps.get_graph_service] = lambda: graph_service
    app.dependency_overrides[deps.get_gemini_service] = lambda: gemini_service
    app.dependency_overrides[deps.get_notification_outbox] = lambda: outbox
    app.dependency_overrides[deps.get_notification_sink] = lambda: outbox

    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(records_router)
    app.include_router(medications_router)
    app.include_router(profile_router)
    app.include_router(analysis_router)
    app.include_router(reminders_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)
