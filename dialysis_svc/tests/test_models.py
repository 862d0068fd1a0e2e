"""
Tests for domain models and their storage format.
"""
from datetime import date

import pytest

from models import HealthRecord, Medication, PatientProfile, TreatmentDuration
from factories import make_medication, make_record


# =============================================================================
# MEDICATION TAKEN STATE
# =============================================================================

def test_stale_taken_flag_reads_as_not_taken():
    med = make_medication(taken_today=True, last_taken_date=date(2024, 5, 1))
    assert med.is_taken_on(date(2024, 5, 1)) is True
    assert med.is_taken_on(date(2024, 5, 2)) is False


def test_toggle_on_new_day_marks_taken_today():
    med = make_medication(taken_today=True, last_taken_date=date(2024, 5, 1))
    toggled = med.toggled(date(2024, 5, 2))
    assert toggled.taken_today is True
    assert toggled.last_taken_date == date(2024, 5, 2)


def test_toggle_twice_same_day_untakes_and_keeps_date():
    med = make_medication()
    day = date(2024, 5, 2)
    taken = med.toggled(day)
    untaken = taken.toggled(day)
    assert untaken.is_taken_on(day) is False
    assert untaken.last_taken_date == day


def test_medication_storage_keys():
    med = make_medication(reminder_time="20:30", taken_today=True, last_taken_date=date(2024, 5, 2))
    data = med.to_dict()
    assert data["reminderTime"] == "20:30"
    assert data["takenToday"] is True
    assert data["lastTakenDate"] == "2024-05-02"


def test_medication_empty_last_taken_date_means_never():
    med = Medication.from_dict({
        "id": "m1", "name": "Sevelamer", "dosage": "800mg", "frequency": "With meals on dialysis days",
        "takenToday": False, "lastTakenDate": "",
    })
    assert med.last_taken_date is None
    assert med.reminder_time is None


# =============================================================================
# HEALTH RECORD
# =============================================================================

def test_record_storage_uses_camel_case():
    record = make_record(fluid_removal=2.5, notes="cramps")
    data = record.to_dict()
    assert data["dryWeight"] == 60.0
    assert data["fluidRemoval"] == 2.5
    assert HealthRecord.from_dict(data) == record


def test_record_without_fluid_removal():
    data = make_record().to_dict()
    assert "fluidRemoval" not in data
    assert HealthRecord.from_dict(data).fluid_removal is None


def test_record_missing_required_field_raises():
    with pytest.raises(KeyError):
        HealthRecord.from_dict({"id": "r1", "date": "2024-05-01"})


# =============================================================================
# PROFILE
# =============================================================================

def test_profile_with_start_date():
    profile = PatientProfile(
        name="Li Wei", age=68,
        treatment_duration=TreatmentDuration.from_start_date(date(2023, 1, 15)),
    )
    data = profile.to_dict()
    assert data["treatmentDuration"] == {"kind": "start_date", "startDate": "2023-01-15"}
    assert PatientProfile.from_dict(data) == profile


def test_legacy_profile_month_count_is_read_as_months_variant():
    profile = PatientProfile.from_dict({"name": "Li Wei", "age": 68, "dialysisAge": 14})
    assert profile.treatment_duration == TreatmentDuration.from_months(14)


def test_unknown_duration_kind_raises():
    with pytest.raises(ValueError):
        TreatmentDuration.from_dict({"kind": "weeks", "weeks": 3})
