"""
Time-on-dialysis calculation.

Counts calendar months only: the day of month is ignored, so 2023-01-15
to 2024-03-01 is 14 months.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

FUTURE_START_ERROR = "The dialysis start date cannot be later than today"


@dataclass(frozen=True)
class DialysisDuration:
    """Elapsed months on treatment, or an error for an impossible start date."""
    months: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None and self.months is not None

    @property
    def years(self) -> int:
        return (self.months or 0) // 12

    @property
    def remaining_months(self) -> int:
        return (self.months or 0) % 12

    def describe(self) -> str:
        """Human-readable "Y years M months" breakdown, or the error text."""
        if not self.is_valid:
            return self.error or ""
        return f"{_plural(self.years, 'year')} {_plural(self.remaining_months, 'month')}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def months_between(start: date, reference: date) -> int:
    """Whole calendar months from start to reference, clamped at zero."""
    months = (reference.year - start.year) * 12 + (reference.month - start.month)
    return max(months, 0)


def calculate_dialysis_duration(start_date: date, reference_date: date) -> DialysisDuration:
    """
    Months on dialysis as of `reference_date` (normally today).

    A start date strictly after the reference date is an input error rather
    than a negative duration.
    """
    if start_date > reference_date:
        return DialysisDuration(error=FUTURE_START_ERROR)
    return DialysisDuration(months=months_between(start_date, reference_date))


def duration_from_months(months: int) -> DialysisDuration:
    """Wrap a directly entered month count."""
    return DialysisDuration(months=max(months, 0))
