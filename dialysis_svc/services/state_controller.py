"""
Single owner of the in-memory application state.

Architecture:
    Services → AppStateController → AppStateRepository → Database

The controller loads AppState once, hands out read-only snapshots, and
persists the affected slice right after every mutation (save-on-change).
There is exactly one controller per process (see core.dependencies); all
request handlers run on the event loop, so there is a single writer.
"""
import logging
import uuid
from datetime import date
from typing import List, Optional, Tuple

from core.exceptions import MedicationNotFoundError
from models import (
    AppState,
    HealthRecord,
    Medication,
    NotificationPermission,
    PatientProfile,
)
from repositories import AppStateRepository

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Opaque unique identifier for new records and medications."""
    return uuid.uuid4().hex


class AppStateController:
    """Explicit load / mutate / persist operations over AppState."""

    def __init__(self, repository: AppStateRepository):
        """
        Args:
            repository: Persistence for the state slices.
                        Injected via core.dependencies.get_state_controller().
        """
        self._repo = repository
        self._state: AppState = repository.load()

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    @property
    def records(self) -> Tuple[HealthRecord, ...]:
        return tuple(self._state.records)

    @property
    def medications(self) -> Tuple[Medication, ...]:
        return tuple(self._state.medications)

    @property
    def profile(self) -> Optional[PatientProfile]:
        return self._state.profile

    @property
    def notification_permission(self) -> NotificationPermission:
        return self._state.notification_permission

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def add_record(self, record: HealthRecord) -> HealthRecord:
        records = self._state.records + [record]
        self._repo.save_records(records)
        self._state.records = records
        logger.info("Health record added", extra={"record_id": record.id, "date": record.date.isoformat()})
        return record

    # -------------------------------------------------------------------------
    # Medications
    # -------------------------------------------------------------------------

    def add_medication(self, medication: Medication) -> Medication:
        medications = self._state.medications + [medication]
        self._repo.save_medications(medications)
        self._state.medications = medications
        logger.info("Medication added", extra={"medication_id": medication.id})
        return medication

    def remove_medication(self, medication_id: str) -> None:
        """
        Raises:
            MedicationNotFoundError: If no medication has this id.
        """
        remaining = [m for m in self._state.medications if m.id != medication_id]
        if len(remaining) == len(self._state.medications):
            raise MedicationNotFoundError(medication_id=medication_id)
        self._repo.save_medications(remaining)
        self._state.medications = remaining
        logger.info("Medication removed", extra={"medication_id": medication_id})

    def toggle_medication(self, medication_id: str, day: date) -> Medication:
        """
        Flip the taken state of a medication for `day`.

        Raises:
            MedicationNotFoundError: If no medication has this id.
        """
        updated: Optional[Medication] = None
        medications: List[Medication] = []
        for med in self._state.medications:
            if med.id == medication_id:
                updated = med.toggled(day)
                medications.append(updated)
            else:
                medications.append(med)

        if updated is None:
            raise MedicationNotFoundError(medication_id=medication_id)

        self._repo.save_medications(medications)
        self._state.medications = medications
        logger.info(
            "Medication toggled",
            extra={"medication_id": medication_id, "taken": updated.is_taken_on(day)}
        )
        return updated

    # -------------------------------------------------------------------------
    # Profile & permission
    # -------------------------------------------------------------------------

    def save_profile(self, profile: PatientProfile) -> PatientProfile:
        self._repo.save_profile(profile)
        self._state.profile = profile
        logger.info("Profile saved")
        return profile

    def set_notification_permission(self, permission: NotificationPermission) -> NotificationPermission:
        self._repo.save_permission(permission)
        self._state.notification_permission = permission
        logger.info("Notification permission changed", extra={"permission": permission.value})
        return permission
