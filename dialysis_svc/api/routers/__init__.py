"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.dashboard import router as dashboard_router
from api.routers.records import router as records_router
from api.routers.medications import router as medications_router
from api.routers.profile import router as profile_router
from api.routers.analysis import router as analysis_router
from api.routers.reminders import router as reminders_router

__all__ = [
    "health_router",
    "dashboard_router",
    "records_router",
    "medications_router",
    "profile_router",
    "analysis_router",
    "reminders_router",
]
