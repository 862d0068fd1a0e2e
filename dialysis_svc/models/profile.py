"""
Domain models for the patient profile.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

START_DATE = "start_date"
MONTHS = "months"


@dataclass(frozen=True)
class TreatmentDuration:
    """
    How long the patient has been on dialysis, in one of two entry modes.

    kind == "start_date": `start_date` is set and the month count is derived
    at read time.
    kind == "months": `months` was entered directly.
    """
    kind: str
    start_date: Optional[date] = None
    months: Optional[int] = None

    @classmethod
    def from_start_date(cls, start_date: date) -> "TreatmentDuration":
        return cls(kind=START_DATE, start_date=start_date)

    @classmethod
    def from_months(cls, months: int) -> "TreatmentDuration":
        return cls(kind=MONTHS, months=months)

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == START_DATE:
            return {"kind": START_DATE, "startDate": self.start_date.isoformat()}
        return {"kind": MONTHS, "months": self.months}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreatmentDuration":
        kind = data["kind"]
        if kind == START_DATE:
            return cls.from_start_date(date.fromisoformat(data["startDate"]))
        if kind == MONTHS:
            return cls.from_months(int(data["months"]))
        raise ValueError(f"Unknown treatment duration kind: {kind!r}")


@dataclass(frozen=True)
class PatientProfile:
    """Singleton profile: name, age and optional time on treatment."""
    name: str
    age: int
    treatment_duration: Optional[TreatmentDuration] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "age": self.age}
        if self.treatment_duration is not None:
            data["treatmentDuration"] = self.treatment_duration.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatientProfile":
        """
        Create a profile from storage.

        Older profiles stored a bare month count under `dialysisAge`; those
        are read as the direct-months variant.
        """
        duration = None
        if data.get("treatmentDuration"):
            duration = TreatmentDuration.from_dict(data["treatmentDuration"])
        elif data.get("dialysisAge") is not None:
            duration = TreatmentDuration.from_months(int(data["dialysisAge"]))

        return cls(
            name=str(data["name"]),
            age=int(data["age"]),
            treatment_duration=duration,
        )
