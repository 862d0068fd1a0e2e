"""
Tests for the medication reminder scheduler, driven by a FixedClock.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

import pytest

from core.datetime_utils import FixedClock
from models import NotificationPermission
from services.reminders import REMINDER_TITLE, ReminderScheduler
from factories import make_medication


class FakeSink:
    """Records notifications; optionally fails for given medication ids."""

    def __init__(self, fail_for=()):
        self.sent: List[Dict[str, Any]] = []
        self.fail_for = set(fail_for)

    async def notify(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        options = options or {}
        if options.get("medication_id") in self.fail_for:
            raise RuntimeError("notification platform error")
        self.sent.append({"title": title, "body": body, "options": options})


def build_scheduler(clock, medications, permission=NotificationPermission.GRANTED, sink=None):
    sink = sink or FakeSink()
    state = {"medications": list(medications), "permission": permission}
    scheduler = ReminderScheduler(
        clock=clock,
        medications_provider=lambda: state["medications"],
        permission_provider=lambda: state["permission"],
        sink=sink,
    )
    return scheduler, sink, state


@pytest.mark.asyncio
async def test_fires_at_exact_minute_including_startup_minute():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0, 3))
    scheduler, sink, _ = build_scheduler(clock, [make_medication()])

    assert await scheduler.tick() == 1
    assert sink.sent[0]["title"] == REMINDER_TITLE
    assert sink.sent[0]["body"] == "Time to take: Calcium carbonate 1 tablet"
    assert sink.sent[0]["options"]["medication_id"] == "m1"


@pytest.mark.asyncio
async def test_repeated_ticks_in_same_minute_fire_once():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0, 0))
    scheduler, sink, _ = build_scheduler(clock, [make_medication()])

    await scheduler.tick()
    clock.advance(seconds=5)
    await scheduler.tick()
    clock.advance(seconds=50)
    await scheduler.tick()

    assert len(sink.sent) == 1
    assert scheduler.last_checked_minute == "2024-05-02 08:00"


@pytest.mark.asyncio
async def test_taken_today_is_skipped_but_stale_flag_is_not():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0))
    meds = [
        make_medication("m1", taken_today=True, last_taken_date=date(2024, 5, 2)),
        make_medication("m2", name="Sevelamer", taken_today=True, last_taken_date=date(2024, 5, 1)),
    ]
    scheduler, sink, _ = build_scheduler(clock, meds)

    await scheduler.tick()
    assert [s["options"]["medication_id"] for s in sink.sent] == ["m2"]


@pytest.mark.asyncio
async def test_other_minutes_and_missing_reminder_do_not_fire():
    clock = FixedClock(datetime(2024, 5, 2, 7, 59))
    meds = [make_medication("m1"), make_medication("m2", reminder_time=None)]
    scheduler, sink, _ = build_scheduler(clock, meds)

    await scheduler.tick()
    assert sink.sent == []


@pytest.mark.asyncio
async def test_missed_minute_is_not_caught_up():
    clock = FixedClock(datetime(2024, 5, 2, 7, 59))
    scheduler, sink, _ = build_scheduler(clock, [make_medication()])

    await scheduler.tick()
    clock.advance(minutes=2)  # 08:01, the 08:00 tick never happened
    await scheduler.tick()
    assert sink.sent == []


@pytest.mark.asyncio
async def test_fires_again_next_day():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0))
    scheduler, sink, _ = build_scheduler(clock, [make_medication()])

    await scheduler.tick()
    clock.advance(days=1)
    await scheduler.tick()
    assert len(sink.sent) == 2


@pytest.mark.asyncio
async def test_fires_after_overnight_stall_at_same_minute():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0, 10))
    scheduler, sink, _ = build_scheduler(clock, [make_medication()])

    await scheduler.tick()
    # host asleep until the next morning, waking inside the reminder minute
    clock.set(datetime(2024, 5, 3, 8, 0, 40))
    assert await scheduler.tick() == 1
    assert scheduler.last_checked_minute == "2024-05-03 08:00"


@pytest.mark.asyncio
async def test_repeated_wall_clock_minute_on_dst_fall_back_fires_once():
    new_york = ZoneInfo("America/New_York")
    clock = FixedClock(datetime(2024, 11, 3, 1, 30, tzinfo=new_york))
    scheduler, sink, _ = build_scheduler(clock, [make_medication(reminder_time="01:30")])

    assert await scheduler.tick() == 1
    clock.set(datetime(2024, 11, 3, 1, 31, tzinfo=new_york))
    await scheduler.tick()
    # clocks fall back: 01:30 happens again, one hour later in UTC
    clock.set(datetime(2024, 11, 3, 1, 30, tzinfo=new_york, fold=1))
    assert await scheduler.tick() == 0

    assert len(sink.sent) == 1


@pytest.mark.asyncio
async def test_no_notifications_without_permission():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0))
    scheduler, sink, state = build_scheduler(
        clock, [make_medication()], permission=NotificationPermission.DENIED
    )

    assert await scheduler.tick() == 0
    assert scheduler.last_checked_minute is None

    # Granting within the same minute still delivers
    state["permission"] = NotificationPermission.GRANTED
    assert await scheduler.tick() == 1


@pytest.mark.asyncio
async def test_sink_failure_does_not_block_other_medications():
    clock = FixedClock(datetime(2024, 5, 2, 8, 0))
    meds = [make_medication("m1"), make_medication("m2", name="Sevelamer")]
    scheduler, sink, _ = build_scheduler(clock, meds, sink=FakeSink(fail_for={"m1"}))

    assert await scheduler.tick() == 1
    assert [s["options"]["medication_id"] for s in sink.sent] == ["m2"]

    # No retry within the same minute
    assert await scheduler.tick() == 0
