"""
Clinical rules package.

This package contains the pure, stateless calculations shared by the
record form, the charts and any backend validator:
- thresholds: fluid-removal and blood-pressure risk flags
- duration: months on dialysis from a start date

Usage:
    from services.clinical import evaluate_blood_pressure, is_fluid_removal_excessive

    status = evaluate_blood_pressure(145, 88, patient_age=None)
    status.kind  # BloodPressureStatusKind.WARNING
"""

from services.clinical.thresholds import (
    FLUID_REMOVAL_WARNING_RATIO,
    Number,
    HYPOTENSION_SYSTOLIC,
    HYPOTENSION_DIASTOLIC,
    ELDERLY_AGE,
    ADULT_LIMITS,
    ELDERLY_LIMITS,
    BloodPressureLimits,
    BloodPressureStatus,
    BloodPressureStatusKind,
    parse_number,
    parse_whole_number,
    fluid_removal_ratio,
    is_fluid_removal_excessive,
    blood_pressure_limits,
    evaluate_blood_pressure,
)
from services.clinical.duration import (
    DialysisDuration,
    calculate_dialysis_duration,
    duration_from_months,
    months_between,
)

__all__ = [
    'FLUID_REMOVAL_WARNING_RATIO',
    'Number',
    'HYPOTENSION_SYSTOLIC',
    'HYPOTENSION_DIASTOLIC',
    'ELDERLY_AGE',
    'ADULT_LIMITS',
    'ELDERLY_LIMITS',
    'BloodPressureLimits',
    'BloodPressureStatus',
    'BloodPressureStatusKind',
    'parse_number',
    'parse_whole_number',
    'fluid_removal_ratio',
    'is_fluid_removal_excessive',
    'blood_pressure_limits',
    'evaluate_blood_pressure',
    'DialysisDuration',
    'calculate_dialysis_duration',
    'duration_from_months',
    'months_between',
]
