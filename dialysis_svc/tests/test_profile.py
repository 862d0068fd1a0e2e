"""
API tests for the patient profile and time on treatment.
"""
from datetime import datetime

import pytest


def test_profile_missing(client):
    response = client.get("/api/v1/profile")
    assert response.status_code == 404


def test_save_profile_with_start_date(client):
    response = client.put("/api/v1/profile", json={
        "name": "Li Wei",
        "age": 68,
        "treatment_duration": {"kind": "start_date", "start_date": "2023-01-15"},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["treatment_duration"] == {"kind": "start_date", "start_date": "2023-01-15"}
    # 2023-01 → 2024-05
    assert data["months_on_treatment"] == 16
    assert data["duration_text"] == "1 year 4 months"
    assert data["duration_error"] is None

    assert client.get("/api/v1/profile").json() == data


def test_save_profile_with_month_count(client):
    data = client.put("/api/v1/profile", json={
        "name": "Li Wei", "age": 40, "treatment_duration": {"kind": "months", "months": 14},
    }).json()
    assert data["months_on_treatment"] == 14
    assert data["duration_text"] == "1 year 2 months"


def test_save_profile_without_duration(client):
    data = client.put("/api/v1/profile", json={"name": "Li Wei", "age": 40}).json()
    assert data["treatment_duration"] is None
    assert data["months_on_treatment"] is None
    assert data["duration_error"] is None


def test_profile_is_replaced(client):
    client.put("/api/v1/profile", json={"name": "Li Wei", "age": 40})
    client.put("/api/v1/profile", json={"name": "Wang Fang", "age": 71})
    data = client.get("/api/v1/profile").json()
    assert data["name"] == "Wang Fang"
    assert data["age"] == 71


def test_future_start_date_is_rejected(client):
    response = client.put("/api/v1/profile", json={
        "name": "Li Wei", "age": 68,
        "treatment_duration": {"kind": "start_date", "start_date": "2024-05-03"},
    })
    assert response.status_code == 400
    assert client.get("/api/v1/profile").status_code == 404


def test_stored_start_date_after_today_reports_error(client, clock):
    client.put("/api/v1/profile", json={
        "name": "Li Wei", "age": 68,
        "treatment_duration": {"kind": "start_date", "start_date": "2024-05-01"},
    })
    clock.set(datetime(2024, 4, 30, 9, 0))

    data = client.get("/api/v1/profile").json()
    assert data["months_on_treatment"] is None
    assert data["duration_error"] == "The dialysis start date cannot be later than today"


@pytest.mark.parametrize("payload", [
    {"name": "Li Wei", "age": 0},
    {"name": "Li Wei", "age": 121},
    {"name": "", "age": 40},
    {"name": "Li Wei", "age": 40, "treatment_duration": {"kind": "weeks", "weeks": 3}},
    {"name": "Li Wei", "age": 40, "treatment_duration": {"kind": "months", "months": -1}},
])
def test_invalid_profile_payloads(client, payload):
    assert client.put("/api/v1/profile", json=payload).status_code == 422


def test_blank_name_is_rejected(client):
    assert client.put("/api/v1/profile", json={"name": "   ", "age": 40}).status_code == 400
