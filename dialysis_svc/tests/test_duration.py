"""
Unit tests for the dialysis-duration calculator.
"""
from datetime import date

from services.clinical import (
    calculate_dialysis_duration,
    duration_from_months,
    months_between,
)
from services.clinical.duration import FUTURE_START_ERROR


def test_day_of_month_is_ignored():
    result = calculate_dialysis_duration(date(2023, 1, 15), date(2024, 3, 1))
    assert result.is_valid
    assert result.months == 14


def test_same_month_is_zero():
    assert calculate_dialysis_duration(date(2024, 5, 1), date(2024, 5, 31)).months == 0


def test_start_after_reference_is_an_error():
    result = calculate_dialysis_duration(date(2024, 5, 3), date(2024, 5, 2))
    assert not result.is_valid
    assert result.months is None
    assert result.error == FUTURE_START_ERROR
    assert result.describe() == FUTURE_START_ERROR


def test_months_between_clamps_at_zero():
    assert months_between(date(2025, 1, 1), date(2024, 1, 1)) == 0


def test_breakdown():
    result = duration_from_months(14)
    assert result.years == 1
    assert result.remaining_months == 2
    assert result.describe() == "1 year 2 months"
    assert duration_from_months(25).describe() == "2 years 1 month"
    assert duration_from_months(0).describe() == "0 years 0 months"
