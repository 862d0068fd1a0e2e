"""
Asyncio polling loop that drives the ReminderScheduler.

One task per process, started and stopped by the FastAPI lifespan. Each
tick is awaited before the next sleep, so ticks never overlap.
"""
import asyncio
import logging
from typing import Optional

from services.reminders.scheduler import ReminderScheduler

logger = logging.getLogger(__name__)


class ReminderLoop:
    """Calls scheduler.tick() every `interval` seconds until stopped."""

    def __init__(self, scheduler: ReminderScheduler, interval: float):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._scheduler = scheduler
        self._interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="reminder-loop")
        logger.info(f"Reminder loop started (every {self._interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Reminder loop stopped")

    async def _run(self) -> None:
        while True:
            try:
                await self._scheduler.tick()
            except Exception:
                logger.exception("Reminder tick failed")
            await asyncio.sleep(self._interval)
