"""
Wall-clock and calendar helpers.

The tracker reasons in the patient's local wall-clock time: a reminder set
for 08:00 fires at 08:00 on the clock on the wall, and "today" is the local
calendar date. All code that needs the current time receives a Clock so
that tests can drive it with a FixedClock instead of waiting on real time.

Usage:
    from core.datetime_utils import SystemClock, format_minute, format_date

    clock = SystemClock()
    now = clock.now()
    format_minute(now)   # "08:00"
    format_date(now)     # "2024-05-01"
"""
import re
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Protocol, Union
from zoneinfo import ZoneInfo

# 24h HH:MM, zero-padded
REMINDER_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
# "YYYY-MM", used for query and body validation
MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


# =============================================================================
# CLOCKS
# =============================================================================

class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Real wall clock in a configured timezone (host local zone by default)."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self._tz = tz

    @classmethod
    def from_name(cls, tz_name: str) -> "SystemClock":
        """Build a clock from an IANA zone name; empty means host local time."""
        if not tz_name:
            return cls()
        return cls(ZoneInfo(tz_name))

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)


class FixedClock:
    """Manually driven clock for tests and previews."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current

    def advance(self, **kwargs: float) -> None:
        """Move forward by a timedelta given as keyword args (seconds=5, minutes=1)."""
        self.current = self.current + timedelta(**kwargs)


# =============================================================================
# FORMATTING
# =============================================================================

def format_minute(dt: datetime) -> str:
    """Wall-clock minute as zero-padded 24h "HH:MM"."""
    return dt.strftime("%H:%M")


def format_date(value: Union[date, datetime]) -> str:
    """Calendar date as "YYYY-MM-DD"."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


# =============================================================================
# VALIDATION
# =============================================================================

def is_valid_reminder_time(value: str) -> bool:
    """True for a zero-padded 24h "HH:MM" string."""
    return bool(REMINDER_TIME_PATTERN.match(value))
