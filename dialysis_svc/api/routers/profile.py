"""
Profile router - the single patient profile.
"""
import logging

from fastapi import APIRouter, Depends

from core.dependencies import get_profile_service
from schemas import ProfileResponse, ProfileUpdate
from services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/profile",
    tags=["Profile"],
)


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Get the patient profile",
    description="Name, age and time on dialysis resolved as of today. 404 until the profile is saved."
)
async def get_profile(
    profile_service: ProfileService = Depends(get_profile_service)
):
    return profile_service.get_profile()


@router.put(
    "",
    response_model=ProfileResponse,
    summary="Save the patient profile",
    description="Create or replace the profile. Time on treatment is either a start date "
                "(`{\"kind\": \"start_date\", \"start_date\": \"2023-01-15\"}`) or a month count "
                "(`{\"kind\": \"months\", \"months\": 14}`)."
)
async def save_profile(
    profile: ProfileUpdate,
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    Raises:
    - 400 Bad Request: If the start date is after today (InvalidProfileDataError)
    - 422 Unprocessable Entity: If age is outside 1-120 or the duration is malformed
    """
    return profile_service.save_profile(
        name=profile.name,
        age=profile.age,
        treatment_duration=profile.treatment_duration,
    )
