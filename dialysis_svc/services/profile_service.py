"""
Service layer for the patient profile.

Architecture:
    API Layer (routers) → ProfileService → AppStateController → Repository

Time on treatment is stored as entered (a start date or a month count) and
resolved against the clock on every read.
"""
import logging
from datetime import date
from typing import Optional, Union

from core.datetime_utils import Clock, format_date
from core.exceptions import InvalidProfileDataError, ProfileNotFoundError
from models import PatientProfile, TreatmentDuration
from schemas import MonthsDuration, ProfileResponse, StartDateDuration
from services.clinical import (
    DialysisDuration,
    calculate_dialysis_duration,
    duration_from_months,
)
from services.state_controller import AppStateController

logger = logging.getLogger(__name__)

DurationInput = Union[StartDateDuration, MonthsDuration]


class ProfileService:
    """Read and replace the single patient profile."""

    def __init__(self, controller: AppStateController, clock: Clock):
        self._controller = controller
        self._clock = clock

    def _today(self) -> date:
        return self._clock.now().date()

    def resolve_duration(self, duration: Optional[TreatmentDuration]) -> Optional[DialysisDuration]:
        """Months on treatment as of today, or None when nothing was entered."""
        if duration is None:
            return None
        if duration.start_date is not None:
            return calculate_dialysis_duration(duration.start_date, self._today())
        return duration_from_months(duration.months or 0)

    def _to_response(self, profile: PatientProfile) -> ProfileResponse:
        duration_schema: Optional[DurationInput] = None
        if profile.treatment_duration is not None:
            if profile.treatment_duration.start_date is not None:
                duration_schema = StartDateDuration(start_date=profile.treatment_duration.start_date)
            else:
                duration_schema = MonthsDuration(months=profile.treatment_duration.months or 0)

        resolved = self.resolve_duration(profile.treatment_duration)
        return ProfileResponse(
            name=profile.name,
            age=profile.age,
            treatment_duration=duration_schema,
            months_on_treatment=resolved.months if resolved and resolved.is_valid else None,
            duration_text=resolved.describe() if resolved and resolved.is_valid else None,
            duration_error=resolved.error if resolved else None,
        )

    def get_profile_model(self) -> Optional[PatientProfile]:
        return self._controller.profile

    def get_profile(self) -> ProfileResponse:
        """
        Raises:
            ProfileNotFoundError: If the profile has never been saved.
        """
        profile = self._controller.profile
        if profile is None:
            raise ProfileNotFoundError()
        return self._to_response(profile)

    def save_profile(
        self,
        name: str,
        age: int,
        treatment_duration: Optional[DurationInput] = None,
    ) -> ProfileResponse:
        """
        Replace the profile.

        Raises:
            InvalidProfileDataError: If the name is blank or the start date
                is after today.
            StorageError: If the profile could not be persisted.
        """
        name = name.strip()
        if not name:
            raise InvalidProfileDataError(detail="Name must not be blank")

        duration: Optional[TreatmentDuration] = None
        if isinstance(treatment_duration, StartDateDuration):
            today = self._today()
            if treatment_duration.start_date > today:
                raise InvalidProfileDataError(
                    detail="The dialysis start date cannot be later than today",
                    start_date=format_date(treatment_duration.start_date),
                    today=format_date(today),
                )
            duration = TreatmentDuration.from_start_date(treatment_duration.start_date)
        elif isinstance(treatment_duration, MonthsDuration):
            duration = TreatmentDuration.from_months(treatment_duration.months)

        profile = PatientProfile(name=name, age=age, treatment_duration=duration)
        self._controller.save_profile(profile)
        return self._to_response(profile)
