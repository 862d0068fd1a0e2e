"""
Clinical threshold evaluation for dialysis session entries.

Pure functions only: no I/O, no clock. Inputs may come straight from a
form, so every value is accepted as a number, a numeric string, or None;
anything unparseable counts as absent.

Rules:
- Fluid removal warns when removal / dry weight > 5% (strictly greater).
- Blood pressure checks hypotension first (systolic < 90 or diastolic < 60)
  and only then hypertension against age-dependent limits:
  140/90 below 65 years, 150/90 from 65 years. Unknown age uses 140/90.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

Number = Union[int, float, str, None]

FLUID_REMOVAL_WARNING_RATIO = 0.05

HYPOTENSION_SYSTOLIC = 90
HYPOTENSION_DIASTOLIC = 60

ELDERLY_AGE = 65


@dataclass(frozen=True)
class BloodPressureLimits:
    """Upper limits above which a reading counts as high."""
    systolic: int
    diastolic: int


ADULT_LIMITS = BloodPressureLimits(systolic=140, diastolic=90)
ELDERLY_LIMITS = BloodPressureLimits(systolic=150, diastolic=90)


class BloodPressureStatusKind(str, Enum):
    DANGER = "danger"
    WARNING = "warning"


@dataclass(frozen=True)
class BloodPressureStatus:
    """A single active blood-pressure finding."""
    kind: BloodPressureStatusKind
    message: str
    detail: str
    limits: Optional[BloodPressureLimits] = None


# =============================================================================
# INPUT COERCION
# =============================================================================

def parse_number(value: Number) -> Optional[float]:
    """Read a real number; None for absent, NaN, infinite or unparseable input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_whole_number(value: Number) -> Optional[int]:
    """Read an integer, truncating any fractional part; None if unparseable."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_number(value)
    if number is None:
        return None
    return int(number)


# =============================================================================
# FLUID REMOVAL
# =============================================================================

def fluid_removal_ratio(dry_weight: Number, fluid_removal: Number) -> Optional[float]:
    """
    Fluid removed as a fraction of dry weight.

    Returns None when either value is missing or dry weight is not positive.
    """
    dw = parse_number(dry_weight)
    fr = parse_number(fluid_removal)
    if dw is None or fr is None or dw <= 0:
        return None
    return fr / dw


def is_fluid_removal_excessive(dry_weight: Number, fluid_removal: Number) -> bool:
    """True iff removal exceeds 5% of dry weight. Exactly 5% does not warn."""
    ratio = fluid_removal_ratio(dry_weight, fluid_removal)
    return ratio is not None and ratio > FLUID_REMOVAL_WARNING_RATIO


# =============================================================================
# BLOOD PRESSURE
# =============================================================================

def blood_pressure_limits(patient_age: Number = None) -> BloodPressureLimits:
    """Hypertension limits for the given age; adult limits when age is unknown."""
    age = parse_whole_number(patient_age)
    if age is not None and age >= ELDERLY_AGE:
        return ELDERLY_LIMITS
    return ADULT_LIMITS


def evaluate_blood_pressure(
    systolic: Number,
    diastolic: Number,
    patient_age: Number = None,
) -> Optional[BloodPressureStatus]:
    """
    Classify a blood pressure reading.

    Returns:
        DANGER status for hypotension, WARNING status for hypertension,
        or None when the reading is normal or incomplete.
    """
    sys_value = parse_whole_number(systolic)
    dia_value = parse_whole_number(diastolic)
    if sys_value is None or dia_value is None:
        return None

    # Low pressure during dialysis is the acute risk, so it wins outright
    if sys_value < HYPOTENSION_SYSTOLIC or dia_value < HYPOTENSION_DIASTOLIC:
        return BloodPressureStatus(
            kind=BloodPressureStatusKind.DANGER,
            message="Low blood pressure (hypotension)",
            detail=(
                "Low blood pressure during or after dialysis is very risky. "
                "Stop fluid removal immediately and consult your doctor."
            ),
        )

    age = parse_whole_number(patient_age)
    if age is not None and age <= 0:
        age = None
    limits = blood_pressure_limits(age)

    if sys_value > limits.systolic or dia_value > limits.diastolic:
        if age is not None:
            detail = (
                f"For a {age}-year-old patient, systolic above {limits.systolic} "
                f"or diastolic above {limits.diastolic} is considered high."
            )
        else:
            detail = (
                f"Systolic above {limits.systolic} or diastolic above {limits.diastolic} "
                "is considered high. Keep an eye on salt and fluid intake."
            )
        return BloodPressureStatus(
            kind=BloodPressureStatusKind.WARNING,
            message="High blood pressure",
            detail=detail,
            limits=limits,
        )

    return None
