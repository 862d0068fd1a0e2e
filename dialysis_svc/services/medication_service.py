"""
Service layer for medication operations.

Architecture:
    API Layer (routers) → MedicationService → AppStateController → Repository

The taken state is always resolved against the clock's current date, so a
medication ticked yesterday reads as "not taken" today without any
midnight reset job.
"""
import logging
from datetime import date
from typing import List, Optional

from core.datetime_utils import Clock, format_date
from models import Medication
from schemas import FREQUENCY_PRESETS, MedicationResponse
from services.state_controller import AppStateController, new_id

logger = logging.getLogger(__name__)


class MedicationService:
    """Service layer for the medication list and its daily checklist."""

    def __init__(self, controller: AppStateController, clock: Clock):
        self._controller = controller
        self._clock = clock

    def _today(self) -> date:
        return self._clock.now().date()

    def _to_response(self, medication: Medication, today: date) -> MedicationResponse:
        return MedicationResponse(
            id=medication.id,
            name=medication.name,
            dosage=medication.dosage,
            frequency=medication.frequency,
            reminder_time=medication.reminder_time,
            taken_today=medication.is_taken_on(today),
            last_taken_date=format_date(medication.last_taken_date) if medication.last_taken_date else None,
        )

    def add_medication(
        self,
        name: str,
        dosage: str,
        frequency: str,
        reminder_time: Optional[str] = None,
    ) -> MedicationResponse:
        """
        Add a medication to the list.

        New medications start as not taken.

        Raises:
            StorageError: If the list could not be persisted.
        """
        medication = Medication(
            id=new_id(),
            name=name,
            dosage=dosage,
            frequency=frequency,
            reminder_time=reminder_time,
        )
        self._controller.add_medication(medication)
        return self._to_response(medication, self._today())

    def get_medications(self) -> List[MedicationResponse]:
        """All medications in insertion order, with today's taken state."""
        today = self._today()
        return [self._to_response(m, today) for m in self._controller.medications]

    def count_taken_today(self) -> int:
        today = self._today()
        return sum(1 for m in self._controller.medications if m.is_taken_on(today))

    def toggle_medication(self, medication_id: str) -> MedicationResponse:
        """
        Mark a medication taken today, or undo that mark.

        Raises:
            MedicationNotFoundError: If no medication has this id.
        """
        today = self._today()
        updated = self._controller.toggle_medication(medication_id, today)
        return self._to_response(updated, today)

    def delete_medication(self, medication_id: str) -> None:
        """
        Raises:
            MedicationNotFoundError: If no medication has this id.
        """
        self._controller.remove_medication(medication_id)

    @staticmethod
    def get_frequency_presets() -> List[str]:
        return list(FREQUENCY_PRESETS)
