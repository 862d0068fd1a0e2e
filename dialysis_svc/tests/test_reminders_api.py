"""
API tests for the notification permission and the in-app outbox.
"""
from services.reminders import ReminderScheduler
from factories import make_medication


def test_permission_defaults_to_unrequested(client):
    assert client.get("/api/v1/reminders/permission").json() == {"permission": "default"}


def test_granting_sends_one_confirmation(client, outbox):
    response = client.put("/api/v1/reminders/permission", json={"permission": "granted"})
    assert response.status_code == 200
    assert response.json() == {"permission": "granted"}

    client.put("/api/v1/reminders/permission", json={"permission": "granted"})

    notifications = client.get("/api/v1/reminders/notifications").json()
    assert len(notifications) == 1
    assert notifications[0]["title"] == "Medication reminders are on"


def test_denying_sends_nothing(client, outbox):
    client.put("/api/v1/reminders/permission", json={"permission": "denied"})
    assert client.get("/api/v1/reminders/permission").json()["permission"] == "denied"
    assert len(outbox) == 0


def test_invalid_permission(client):
    assert client.put("/api/v1/reminders/permission", json={"permission": "maybe"}).status_code == 422


def test_scheduled_reminder_shows_up_in_outbox(client, controller, clock, outbox):
    import asyncio

    controller.add_medication(make_medication())
    client.put("/api/v1/reminders/permission", json={"permission": "granted"})
    scheduler = ReminderScheduler(
        clock=clock,
        medications_provider=lambda: controller.medications,
        permission_provider=lambda: controller.notification_permission,
        sink=outbox,
    )

    assert asyncio.run(scheduler.tick()) == 1

    notifications = client.get("/api/v1/reminders/notifications").json()
    assert notifications[0]["title"] == "Medication reminder"
    assert notifications[0]["body"] == "Time to take: Calcium carbonate 1 tablet"
    assert notifications[0]["medication_id"] == "m1"
    assert notifications[0]["sent_at"] == "2024-05-02T08:00:00"


def test_notifications_limit(client):
    assert client.get("/api/v1/reminders/notifications", params={"limit": 0}).status_code == 422
