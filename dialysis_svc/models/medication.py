"""
Domain model for a tracked medication.
"""
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Medication:
    """
    A medication with an optional daily reminder.

    `taken_today` only means something together with `last_taken_date`:
    the pair records whether the medication was marked taken on that date.
    A stale `taken_today=True` from an earlier day reads as "not taken",
    so callers must always go through `is_taken_on`.
    """
    id: str
    name: str
    dosage: str
    frequency: str
    reminder_time: Optional[str] = None
    taken_today: bool = False
    last_taken_date: Optional[date] = None

    def is_taken_on(self, day: date) -> bool:
        """True if the medication has been marked taken on `day`."""
        return self.taken_today and self.last_taken_date == day

    def toggled(self, day: date) -> "Medication":
        """
        Return a copy with the taken state flipped for `day`.

        Un-taking keeps the previous `last_taken_date`; taking stamps `day`.
        """
        if self.is_taken_on(day):
            return replace(self, taken_today=False)
        return replace(self, taken_today=True, last_taken_date=day)

    def to_dict(self) -> Dict[str, Any]:
        """Convert medication to its storage dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "takenToday": self.taken_today,
            "lastTakenDate": self.last_taken_date.isoformat() if self.last_taken_date else "",
        }
        if self.reminder_time:
            data["reminderTime"] = self.reminder_time
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Medication":
        """
        Create a medication from its storage dictionary.

        An empty `lastTakenDate` string is read as "never taken".

        Raises:
            KeyError, TypeError, ValueError: If the entry is malformed.
        """
        last_taken = data.get("lastTakenDate") or None
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            dosage=str(data.get("dosage", "")),
            frequency=str(data.get("frequency", "")),
            reminder_time=data.get("reminderTime") or None,
            taken_today=bool(data.get("takenToday", False)),
            last_taken_date=date.fromisoformat(last_taken) if last_taken else None,
        )
