"""
Domain model for a single dialysis-session health record.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class HealthRecord:
    """
    One entry from the record form. Immutable once created.

    Attributes:
        id: Opaque unique identifier
        date: Calendar day of the measurement
        weight: Body weight in kg
        dry_weight: Clinician-set target weight in kg
        systolic: Systolic pressure in mmHg
        diastolic: Diastolic pressure in mmHg
        fluid_removal: Fluid removed during the session (kg/L), if recorded
        notes: Free text, possibly transcribed from a voice note
    """
    id: str
    date: date
    weight: float
    dry_weight: float
    systolic: int
    diastolic: int
    fluid_removal: Optional[float] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to its storage dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "date": self.date.isoformat(),
            "weight": self.weight,
            "dryWeight": self.dry_weight,
            "systolic": self.systolic,
            "diastolic": self.diastolic,
        }
        if self.fluid_removal is not None:
            data["fluidRemoval"] = self.fluid_removal
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HealthRecord":
        """
        Create a record from its storage dictionary.

        Raises:
            KeyError, TypeError, ValueError: If the entry is malformed.
        """
        fluid_removal = data.get("fluidRemoval")
        return cls(
            id=str(data["id"]),
            date=date.fromisoformat(data["date"]),
            weight=float(data["weight"]),
            dry_weight=float(data["dryWeight"]),
            systolic=int(data["systolic"]),
            diastolic=int(data["diastolic"]),
            fluid_removal=float(fluid_removal) if fluid_removal is not None else None,
            notes=data.get("notes") or None,
        )
