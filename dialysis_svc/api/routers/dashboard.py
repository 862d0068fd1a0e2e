"""
Dashboard router - overview of the latest readings.
"""
from fastapi import APIRouter, Depends

from core.dependencies import get_dashboard_service
from schemas import DashboardResponse
from services.dashboard_service import DashboardService

router = APIRouter(
    prefix="/api/v1/dashboard",
    tags=["Dashboard"],
)


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Overview",
    description="Greeting name, latest weight and blood pressure, and today's medication progress."
)
async def get_dashboard(
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    return dashboard_service.get_dashboard()
