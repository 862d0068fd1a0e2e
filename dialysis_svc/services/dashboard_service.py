"""
Overview data: latest readings and today's medication progress.
"""
from core.datetime_utils import Clock, format_date
from schemas import DashboardResponse
from services.medication_service import MedicationService
from services.record_service import RecordService
from services.state_controller import AppStateController


class DashboardService:
    """Aggregates the other services for the landing page."""

    def __init__(
        self,
        controller: AppStateController,
        record_service: RecordService,
        medication_service: MedicationService,
        clock: Clock,
    ):
        self._controller = controller
        self._records = record_service
        self._medications = medication_service
        self._clock = clock

    def get_dashboard(self) -> DashboardResponse:
        profile = self._controller.profile
        latest = self._records.get_latest_record()
        return DashboardResponse(
            patient_name=profile.name if profile else None,
            profile_missing=profile is None,
            today=format_date(self._clock.now().date()),
            latest_weight=latest.weight if latest else None,
            latest_systolic=latest.systolic if latest else None,
            latest_diastolic=latest.diastolic if latest else None,
            latest_dry_weight=latest.dry_weight if latest else None,
            medications_taken=self._medications.count_taken_today(),
            medications_total=len(self._controller.medications),
        )
