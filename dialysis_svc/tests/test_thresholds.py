"""
Unit tests for the clinical threshold evaluator.
"""
import math

import pytest

from services.clinical import (
    ADULT_LIMITS,
    ELDERLY_LIMITS,
    BloodPressureStatusKind,
    blood_pressure_limits,
    evaluate_blood_pressure,
    fluid_removal_ratio,
    is_fluid_removal_excessive,
    parse_number,
    parse_whole_number,
)


# =============================================================================
# NUMBER PARSING
# =============================================================================

@pytest.mark.parametrize("value,expected", [
    (60, 60.0),
    ("3.2", 3.2),
    (" 145 ", 145.0),
    ("", None),
    ("abc", None),
    (None, None),
    (True, None),
    ("nan", None),
    (math.inf, None),
])
def test_parse_number(value, expected):
    assert parse_number(value) == expected


def test_parse_whole_number_truncates():
    assert parse_whole_number("70.9") == 70
    assert parse_whole_number("") is None


# =============================================================================
# FLUID REMOVAL
# =============================================================================

def test_fluid_removal_exactly_five_percent_does_not_warn():
    assert fluid_removal_ratio(60, 3) == pytest.approx(0.05)
    assert is_fluid_removal_excessive(60, 3) is False


def test_fluid_removal_above_five_percent_warns():
    assert is_fluid_removal_excessive(100, 5.01) is True
    assert is_fluid_removal_excessive("60", "3.2") is True


@pytest.mark.parametrize("dry_weight,fluid_removal", [
    (None, 3.0),
    (60, None),
    ("", "3"),
    ("abc", 3),
    (0, 3),
    (-60, 3),
])
def test_fluid_removal_missing_or_invalid_inputs_never_warn(dry_weight, fluid_removal):
    assert fluid_removal_ratio(dry_weight, fluid_removal) is None
    assert is_fluid_removal_excessive(dry_weight, fluid_removal) is False


# =============================================================================
# BLOOD PRESSURE
# =============================================================================

def test_limits_by_age():
    assert blood_pressure_limits(None) == ADULT_LIMITS
    assert blood_pressure_limits(64) == ADULT_LIMITS
    assert blood_pressure_limits(65) == ELDERLY_LIMITS
    assert ADULT_LIMITS.systolic == 140 and ADULT_LIMITS.diastolic == 90
    assert ELDERLY_LIMITS.systolic == 150 and ELDERLY_LIMITS.diastolic == 90


def test_normal_reading_has_no_status():
    assert evaluate_blood_pressure(120, 80, 50) is None


def test_missing_pressure_has_no_status():
    assert evaluate_blood_pressure(None, 80) is None
    assert evaluate_blood_pressure("", "80") is None
    assert evaluate_blood_pressure("120", "x") is None


def test_elderly_patient_uses_relaxed_systolic_limit():
    assert evaluate_blood_pressure(148, 85, 70) is None

    status = evaluate_blood_pressure(151, 85, 70)
    assert status is not None
    assert status.kind == BloodPressureStatusKind.WARNING
    assert status.limits == ELDERLY_LIMITS
    assert "70" in status.detail


def test_unknown_age_uses_adult_limits():
    status = evaluate_blood_pressure(145, 88, None)
    assert status is not None
    assert status.kind == BloodPressureStatusKind.WARNING
    assert status.limits == ADULT_LIMITS
    assert "140" in status.detail


def test_diastolic_alone_triggers_hypertension():
    status = evaluate_blood_pressure(130, 95, 40)
    assert status.kind == BloodPressureStatusKind.WARNING


def test_hypotension_preempts_hypertension():
    status = evaluate_blood_pressure(85, 95, 40)
    assert status.kind == BloodPressureStatusKind.DANGER
    assert status.limits is None


@pytest.mark.parametrize("systolic,diastolic", [(89, 70), (110, 59)])
def test_hypotension_thresholds(systolic, diastolic):
    assert evaluate_blood_pressure(systolic, diastolic).kind == BloodPressureStatusKind.DANGER


def test_hypotension_boundary_is_exclusive():
    assert evaluate_blood_pressure(90, 60) is None
