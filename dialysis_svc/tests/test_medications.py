"""
API tests for the medication list and daily checklist.
"""
from datetime import date

from factories import make_medication

VALID_MEDICATION = {
    "name": "Calcium carbonate",
    "dosage": "1 tablet",
    "reminder_time": "08:00",
}


def test_create_medication_defaults(client):
    response = client.post("/api/v1/medications", json=VALID_MEDICATION)
    assert response.status_code == 201
    data = response.json()
    assert data["frequency"] == "Once daily"
    assert data["reminder_time"] == "08:00"
    assert data["taken_today"] is False
    assert data["last_taken_date"] is None


def test_blank_reminder_time_means_no_reminder(client):
    response = client.post("/api/v1/medications", json={**VALID_MEDICATION, "reminder_time": "  "})
    assert response.status_code == 201
    assert response.json()["reminder_time"] is None


def test_free_text_frequency_is_accepted(client):
    response = client.post("/api/v1/medications", json={**VALID_MEDICATION, "frequency": "Every other day"})
    assert response.json()["frequency"] == "Every other day"


def test_invalid_medication_payloads(client):
    for payload in (
        {**VALID_MEDICATION, "reminder_time": "25:00"},
        {**VALID_MEDICATION, "reminder_time": "8:00"},
        {**VALID_MEDICATION, "name": "   "},
        {"dosage": "1 tablet"},
    ):
        assert client.post("/api/v1/medications", json=payload).status_code == 422


def test_frequency_presets(client):
    data = client.get("/api/v1/medications/frequencies").json()
    assert data["frequencies"][0] == "Once daily"
    assert "At bedtime" in data["frequencies"]


def test_list_keeps_insertion_order(client):
    client.post("/api/v1/medications", json={**VALID_MEDICATION, "name": "B"})
    client.post("/api/v1/medications", json={**VALID_MEDICATION, "name": "A"})
    assert [m["name"] for m in client.get("/api/v1/medications").json()] == ["B", "A"]


def test_toggle_taken_today(client):
    med_id = client.post("/api/v1/medications", json=VALID_MEDICATION).json()["id"]

    taken = client.post(f"/api/v1/medications/{med_id}/toggle").json()
    assert taken["taken_today"] is True
    assert taken["last_taken_date"] == "2024-05-02"

    untaken = client.post(f"/api/v1/medications/{med_id}/toggle").json()
    assert untaken["taken_today"] is False
    assert untaken["last_taken_date"] == "2024-05-02"


def test_taken_state_resets_on_next_day(client, clock):
    med_id = client.post("/api/v1/medications", json=VALID_MEDICATION).json()["id"]
    client.post(f"/api/v1/medications/{med_id}/toggle")

    clock.advance(days=1)
    med = client.get("/api/v1/medications").json()[0]
    assert med["taken_today"] is False

    toggled = client.post(f"/api/v1/medications/{med_id}/toggle").json()
    assert toggled["taken_today"] is True
    assert toggled["last_taken_date"] == "2024-05-03"


def test_stale_stored_flag_reads_as_not_taken(client, controller):
    controller.add_medication(make_medication(taken_today=True, last_taken_date=date(2024, 5, 1)))
    assert client.get("/api/v1/medications").json()[0]["taken_today"] is False


def test_delete_medication(client):
    med_id = client.post("/api/v1/medications", json=VALID_MEDICATION).json()["id"]

    assert client.delete(f"/api/v1/medications/{med_id}").status_code == 204
    assert client.get("/api/v1/medications").json() == []
    assert client.delete(f"/api/v1/medications/{med_id}").status_code == 404


def test_toggle_unknown_medication(client):
    response = client.post("/api/v1/medications/does-not-exist/toggle")
    assert response.status_code == 404
    assert response.json()["context"]["medication_id"] == "does-not-exist"
