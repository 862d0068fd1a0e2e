"""
FastAPI application entry point for the Dialysis Companion API.

This module configures and creates the FastAPI application with:
- Structured JSON Logging: Request/response logging with request ids
- Dependency Injection: Services injected via Depends()
- Exception Handling: Consistent error responses via setup_exception_handlers()
- CORS Middleware: Allows a local front-end to call the API
- Lifespan Management: State loading and the medication reminder loop

Architecture Overview:
    ┌─────────────────────────────────────────────────────────────┐
    │                     FastAPI Application                      │
    ├─────────────────────────────────────────────────────────────┤
    │  Middleware Stack (order matters!)                          │
    │    ├── LoggingMiddleware  - Request logging                 │
    │    └── CORSMiddleware     - Cross-origin support            │
    ├─────────────────────────────────────────────────────────────┤
    │  Routers (api/routers/)                                     │
    │    ├── health.py       - /, /health, /ready                 │
    │    ├── dashboard.py    - Overview                           │
    │    ├── records.py      - Records, charts, voice notes       │
    │    ├── medications.py  - Medication checklist               │
    │    ├── profile.py      - Patient profile                    │
    │    ├── analysis.py     - AI summaries                       │
    │    └── reminders.py    - Notification permission & outbox   │
    ├─────────────────────────────────────────────────────────────┤
    │  Services (services/)     ← Injected via Depends()          │
    │    ├── RecordService / MedicationService / ProfileService   │
    │    ├── DashboardService, GraphService, GeminiService        │
    │    └── ReminderScheduler  ← driven by ReminderLoop          │
    ├─────────────────────────────────────────────────────────────┤
    │  AppStateController → AppStateRepository → SQLite KV file   │
    └─────────────────────────────────────────────────────────────┘
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from core.config import API_HOST, API_PORT, API_RELOAD, settings
from core.dependencies import get_database, get_reminder_scheduler, get_state_controller
from core.exceptions import setup_exception_handlers
from core.logging_config import setup_logging
from core.middleware import LoggingMiddleware
from api.routers import (
    analysis_router,
    dashboard_router,
    health_router,
    medications_router,
    profile_router,
    records_router,
    reminders_router,
)
from services.reminders import ReminderLoop


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application.

    Startup:
        - Configures structured JSON logging
        - Opens the database and loads the application state
        - Starts the reminder loop (unless disabled)

    Shutdown:
        - Stops the reminder loop
    """
    # =========================================================================
    # STARTUP
    # =========================================================================

    # Configure structured logging FIRST (before any other logging)
    setup_logging(level="INFO", json_format=True)

    logger = logging.getLogger(__name__)
    logger.info("Starting Dialysis Companion API...")

    db = get_database()
    controller = get_state_controller()
    logger.info(
        "Application state loaded",
        extra={
            "db_path": db.db_path,
            "records": len(controller.records),
            "medications": len(controller.medications),
        }
    )

    reminder_loop = None
    if settings.reminders_enabled:
        reminder_loop = ReminderLoop(
            get_reminder_scheduler(),
            interval=settings.reminder_poll_interval_seconds,
        )
        reminder_loop.start()
    app.state.reminder_loop = reminder_loop

    yield  # Application runs here

    # =========================================================================
    # SHUTDOWN
    # =========================================================================
    if reminder_loop is not None:
        await reminder_loop.stop()
    logger.info("Dialysis Companion API shutting down...")


# Create FastAPI app with lifespan context
app = FastAPI(
    title="Dialysis Companion API",
    description="Personal health tracker for dialysis patients: weight, blood pressure and fluid removal "
                "records with clinical threshold checks, medication checklist with reminders, trend charts "
                "and AI summaries.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================
setup_exception_handlers(app)

# =============================================================================
# MIDDLEWARE
# =============================================================================
# Middleware is executed in REVERSE order of registration.

# 1. CORS Middleware (innermost - closest to routes)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Logging Middleware (outermost - captures all requests)
app.add_middleware(LoggingMiddleware)

# =============================================================================
# ROUTERS
# =============================================================================
app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(records_router)
app.include_router(medications_router)
app.include_router(profile_router)
app.include_router(analysis_router)
app.include_router(reminders_router)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD
    )
