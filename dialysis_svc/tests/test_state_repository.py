"""
Tests for AppStateRepository and AppStateController persistence.
"""
import json
import sqlite3
from datetime import date
from unittest.mock import patch

import pytest

from core.exceptions import MedicationNotFoundError, StorageError
from models import NotificationPermission, PatientProfile
from repositories import AppStateRepository
from repositories.state_repository import (
    MEDICATIONS_KEY,
    PERMISSION_KEY,
    PROFILE_KEY,
    RECORDS_KEY,
)
from services.state_controller import AppStateController
from factories import make_medication, make_record


def test_empty_store_loads_defaults(state_repo):
    state = state_repo.load()
    assert state.records == []
    assert state.medications == []
    assert state.profile is None
    assert state.notification_permission == NotificationPermission.DEFAULT


def test_database_load_and_save(temp_db):
    assert temp_db.load("missing") is None
    temp_db.save("k", "v1")
    temp_db.save("k", "v2")
    assert temp_db.load("k") == "v2"


def test_corrupt_json_degrades_to_default(temp_db, state_repo):
    temp_db.save(RECORDS_KEY, "{not json")
    temp_db.save(PROFILE_KEY, "[1, 2]")
    temp_db.save(PERMISSION_KEY, json.dumps("maybe"))

    state = state_repo.load()
    assert state.records == []
    assert state.profile is None
    assert state.notification_permission == NotificationPermission.DEFAULT


def test_wrong_shape_degrades_to_default(temp_db, state_repo):
    temp_db.save(MEDICATIONS_KEY, json.dumps({"id": "m1"}))
    assert state_repo.load().medications == []


def test_malformed_entries_are_skipped(temp_db, state_repo):
    good = make_record().to_dict()
    temp_db.save(RECORDS_KEY, json.dumps([good, {"id": "broken"}, "junk", {**good, "id": "r2", "date": "not-a-date"}]))

    records = state_repo.load().records
    assert [r.id for r in records] == ["r1"]


def test_state_survives_reload(state_repo):
    controller = AppStateController(repository=state_repo)
    controller.add_record(make_record())
    controller.add_medication(make_medication())
    controller.save_profile(PatientProfile(name="Li Wei", age=68))
    controller.set_notification_permission(NotificationPermission.GRANTED)
    controller.toggle_medication("m1", date(2024, 5, 2))

    reloaded = AppStateController(repository=state_repo)
    assert [r.id for r in reloaded.records] == ["r1"]
    assert reloaded.medications[0].is_taken_on(date(2024, 5, 2))
    assert reloaded.profile.name == "Li Wei"
    assert reloaded.notification_permission == NotificationPermission.GRANTED


def test_remove_unknown_medication_raises(controller):
    with pytest.raises(MedicationNotFoundError):
        controller.remove_medication("nope")
    with pytest.raises(MedicationNotFoundError):
        controller.toggle_medication("nope", date(2024, 5, 2))


def test_failed_write_raises_storage_error_and_keeps_memory(controller, temp_db):
    with patch.object(temp_db, "save", side_effect=sqlite3.OperationalError("disk I/O error")):
        with pytest.raises(StorageError):
            controller.add_record(make_record())
    assert controller.records == ()


def test_snapshots_are_read_only(controller):
    controller.add_record(make_record())
    assert isinstance(controller.records, tuple)
