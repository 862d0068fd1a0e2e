"""
Medication reminder scheduler.

Each tick compares the clock's current minute against the medications'
reminder times and emits at most one batch of notifications per minute.

State:
    _last_checked_minute: "YYYY-MM-DD HH:MM" of the last evaluated local
    minute. A stalled loop that wakes at the same wall-clock minute on a
    later day still evaluates it; missed minutes are never caught up.
    _reminded_on: medication id -> date of its last delivered reminder, so a
    wall-clock minute repeated by a DST fall-back does not remind twice.
    Both live only as long as the process.

The scheduler does no waiting of its own. ReminderLoop calls tick() on a
cadence finer than one minute, and tests call it directly while moving a
FixedClock.
"""
import logging
from datetime import date
from typing import Callable, Dict, Iterable, Optional

from core.datetime_utils import Clock, format_date, format_minute
from models import Medication, NotificationPermission
from services.reminders.notifications import NotificationSink

logger = logging.getLogger(__name__)

REMINDER_TITLE = "Medication reminder"

MedicationsProvider = Callable[[], Iterable[Medication]]
PermissionProvider = Callable[[], NotificationPermission]


def reminder_body(medication: Medication) -> str:
    return f"Time to take: {medication.name} {medication.dosage}"


class ReminderScheduler:
    """Decides which medications are due and hands them to the sink."""

    def __init__(
        self,
        clock: Clock,
        medications_provider: MedicationsProvider,
        permission_provider: PermissionProvider,
        sink: NotificationSink,
    ):
        """
        Args:
            clock: Supplies both the current minute and "today".
            medications_provider: Returns the current medication list.
            permission_provider: Returns the current notification permission.
            sink: Where reminders are delivered.
        """
        self._clock = clock
        self._medications = medications_provider
        self._permission = permission_provider
        self._sink = sink
        self._last_checked_minute: Optional[str] = None
        self._reminded_on: Dict[str, date] = {}

    @property
    def last_checked_minute(self) -> Optional[str]:
        return self._last_checked_minute

    async def tick(self) -> int:
        """
        Evaluate the current minute once.

        Returns:
            int: Number of notifications delivered during this tick.
        """
        if self._permission() != NotificationPermission.GRANTED:
            return 0

        now = self._clock.now()
        minute = format_minute(now)
        marker = f"{format_date(now)} {minute}"
        if marker == self._last_checked_minute:
            return 0
        self._last_checked_minute = marker

        today = now.date()
        sent = 0
        for medication in list(self._medications()):
            if medication.reminder_time != minute or medication.is_taken_on(today):
                continue
            if self._reminded_on.get(medication.id) == today:
                continue
            try:
                await self._sink.notify(
                    REMINDER_TITLE,
                    reminder_body(medication),
                    {"require_interaction": True, "medication_id": medication.id},
                )
                self._reminded_on[medication.id] = today
                sent += 1
            except Exception as e:
                logger.warning(
                    f"Reminder for {medication.name} could not be delivered: {e}",
                    extra={"medication_id": medication.id, "minute": minute}
                )

        if sent:
            logger.info(f"Sent {sent} medication reminder(s)", extra={"minute": minute})
        return sent
