"""
Service layer for health record operations.

This service validates new entries, answers record queries and attaches
the clinical threshold assessment to every record it returns.

Architecture:
    API Layer (routers) → RecordService → AppStateController → Repository

Dependency Injection:
    RecordService receives the controller and a clock via constructor injection.
    Use core.dependencies.get_record_service() in routers with Depends().
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from core.datetime_utils import Clock, format_date
from core.exceptions import InvalidRecordDataError
from models import HealthRecord
from schemas import (
    BloodPressureStatusResponse,
    HealthRecordResponse,
    RecordAssessment,
    RecordFormDefaults,
)
from services.clinical import (
    FLUID_REMOVAL_WARNING_RATIO,
    Number,
    evaluate_blood_pressure,
    fluid_removal_ratio,
)
from services.state_controller import AppStateController, new_id

logger = logging.getLogger(__name__)

AGE_HINT = "Add your age in the profile for a more precise blood pressure evaluation."


def sort_chronologically(records: Iterable[HealthRecord]) -> List[HealthRecord]:
    """Oldest first; entries on the same day keep their insertion order."""
    return sorted(records, key=lambda r: r.date)


def assess_values(
    dry_weight: Number,
    fluid_removal: Number,
    systolic: Number,
    diastolic: Number,
    patient_age: Optional[int],
) -> RecordAssessment:
    """Run the threshold evaluator and shape the result for the API."""
    ratio = fluid_removal_ratio(dry_weight, fluid_removal)
    fluid_warning = ratio is not None and ratio > FLUID_REMOVAL_WARNING_RATIO

    status = evaluate_blood_pressure(systolic, diastolic, patient_age)
    bp_response = None
    if status is not None:
        bp_response = BloodPressureStatusResponse(
            kind=status.kind.value,
            message=status.message,
            detail=status.detail,
            systolic_limit=status.limits.systolic if status.limits else None,
            diastolic_limit=status.limits.diastolic if status.limits else None,
        )

    return RecordAssessment(
        fluid_removal_ratio=round(ratio, 4) if ratio is not None else None,
        fluid_warning=fluid_warning,
        fluid_warning_message=(
            "Fluid removal exceeds 5% of dry weight. Watch for cramps and low blood pressure."
            if fluid_warning else None
        ),
        blood_pressure=bp_response,
        age_hint=AGE_HINT if patient_age is None else None,
    )


class RecordService:
    """
    Service layer for health record operations.

    Handles validation of new entries, month filtering, form defaults and
    threshold assessment.
    """

    def __init__(self, controller: AppStateController, clock: Clock):
        """
        Initialize the record service.

        Args:
            controller: Owner of the application state.
            clock: Source of "today" for validation and defaults.
        """
        self._controller = controller
        self._clock = clock

    def _patient_age(self) -> Optional[int]:
        profile = self._controller.profile
        return profile.age if profile else None

    def _today(self) -> date:
        return self._clock.now().date()

    def get_patient_name(self) -> Optional[str]:
        profile = self._controller.profile
        return profile.name if profile else None

    def _to_response(self, record: HealthRecord, patient_age: Optional[int]) -> HealthRecordResponse:
        return HealthRecordResponse(
            id=record.id,
            date=format_date(record.date),
            weight=record.weight,
            dry_weight=record.dry_weight,
            fluid_removal=record.fluid_removal,
            systolic=record.systolic,
            diastolic=record.diastolic,
            notes=record.notes,
            assessment=assess_values(
                record.dry_weight,
                record.fluid_removal,
                record.systolic,
                record.diastolic,
                patient_age,
            ),
        )

    def add_record(
        self,
        record_date: date,
        weight: float,
        dry_weight: float,
        systolic: int,
        diastolic: int,
        fluid_removal: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> HealthRecordResponse:
        """
        Save a new health record.

        Returns:
            HealthRecordResponse: The created record with its assessment.

        Raises:
            InvalidRecordDataError: If the date is after today or a required
                measurement is not positive.
            StorageError: If the record could not be persisted.
        """
        today = self._today()
        if record_date > today:
            raise InvalidRecordDataError(
                detail="Record date cannot be later than today",
                date=format_date(record_date),
                today=format_date(today),
            )
        if weight <= 0 or dry_weight <= 0:
            raise InvalidRecordDataError(detail="Weight and dry weight must be positive")
        if systolic <= 0 or diastolic <= 0:
            raise InvalidRecordDataError(detail="Blood pressure values must be positive")
        if fluid_removal is not None and fluid_removal < 0:
            raise InvalidRecordDataError(detail="Fluid removal cannot be negative")

        record = HealthRecord(
            id=new_id(),
            date=record_date,
            weight=weight,
            dry_weight=dry_weight,
            systolic=systolic,
            diastolic=diastolic,
            fluid_removal=fluid_removal,
            notes=notes.strip() if notes and notes.strip() else None,
        )
        self._controller.add_record(record)
        return self._to_response(record, self._patient_age())

    def get_record_models(self, month: Optional[str] = None) -> List[HealthRecord]:
        """Records in chronological order, optionally limited to a YYYY-MM month."""
        records = self._controller.records
        if month:
            records = [r for r in records if format_date(r.date).startswith(month)]
        return sort_chronologically(records)

    def get_records(self, month: Optional[str] = None) -> List[HealthRecordResponse]:
        """Records with their assessments, oldest first."""
        age = self._patient_age()
        return [self._to_response(r, age) for r in self.get_record_models(month)]

    def get_latest_record(self) -> Optional[HealthRecord]:
        """The record with the most recent date, if any."""
        records = sort_chronologically(self._controller.records)
        return records[-1] if records else None

    def get_last_dry_weight(self) -> Optional[float]:
        latest = self.get_latest_record()
        return latest.dry_weight if latest else None

    def get_form_defaults(self) -> RecordFormDefaults:
        return RecordFormDefaults(
            date=format_date(self._today()),
            dry_weight=self.get_last_dry_weight(),
            patient_age=self._patient_age(),
        )

    def assess(
        self,
        dry_weight: Number = None,
        fluid_removal: Number = None,
        systolic: Number = None,
        diastolic: Number = None,
    ) -> RecordAssessment:
        """Evaluate draft form values against the current profile age."""
        return assess_values(dry_weight, fluid_removal, systolic, diastolic, self._patient_age())
