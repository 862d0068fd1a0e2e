"""
Medications router - medication list and daily checklist endpoints.

Architecture:
    HTTP Request → Router (this file) → MedicationService → AppStateController → Database
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response

from core.dependencies import get_medication_service
from schemas import FrequencyPresetsResponse, MedicationCreate, MedicationResponse
from services.medication_service import MedicationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/medications",
    tags=["Medications"],
)


@router.get(
    "",
    response_model=List[MedicationResponse],
    summary="List medications",
    description="All medications with today's taken state. A medication ticked on an earlier day reads as not taken."
)
async def list_medications(
    medication_service: MedicationService = Depends(get_medication_service)
):
    return medication_service.get_medications()


@router.get(
    "/frequencies",
    response_model=FrequencyPresetsResponse,
    summary="Frequency presets",
    description="Suggested frequency labels for the add form. Any other label is accepted too."
)
async def list_frequencies():
    return FrequencyPresetsResponse(frequencies=MedicationService.get_frequency_presets())


@router.post(
    "",
    response_model=MedicationResponse,
    status_code=201,
    summary="Add a medication",
    description="Add a medication with an optional daily reminder time (HH:MM, 24h)."
)
async def create_medication(
    medication: MedicationCreate,
    medication_service: MedicationService = Depends(get_medication_service)
):
    """
    Add a medication.

    - **name**: Medication name
    - **dosage**: Free text, e.g. "1 tablet"
    - **frequency**: Free-text label, defaults to "Once daily"
    - **reminder_time**: Optional HH:MM; empty means no reminder
    """
    return medication_service.add_medication(
        name=medication.name,
        dosage=medication.dosage,
        frequency=medication.frequency,
        reminder_time=medication.reminder_time,
    )


@router.post(
    "/{medication_id}/toggle",
    response_model=MedicationResponse,
    summary="Toggle taken today",
    description="Mark the medication as taken today, or undo today's mark."
)
async def toggle_medication(
    medication_id: str = Path(..., description="Medication identifier"),
    medication_service: MedicationService = Depends(get_medication_service)
):
    """
    Raises:
    - 404 Not Found: If the medication doesn't exist (MedicationNotFoundError)
    """
    return medication_service.toggle_medication(medication_id)


@router.delete(
    "/{medication_id}",
    status_code=204,
    summary="Remove a medication",
)
async def delete_medication(
    medication_id: str = Path(..., description="Medication identifier"),
    medication_service: MedicationService = Depends(get_medication_service)
):
    """
    Raises:
    - 404 Not Found: If the medication doesn't exist (MedicationNotFoundError)
    """
    medication_service.delete_medication(medication_id)
    return Response(status_code=204)
