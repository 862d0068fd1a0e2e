"""
Notification sinks for medication reminders.

A sink delivers a (title, body, options) notification somewhere the patient
will see it:
- NotificationOutbox: in-memory list polled by the local front-end
- TelegramNotificationSink: optional push to a Telegram chat
- CompositeNotificationSink: fan-out to several sinks

Sinks may raise; the scheduler treats every failure as best-effort and
never retries.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional, Protocol, Sequence

from telegram import Bot

from core.datetime_utils import Clock, SystemClock

logger = logging.getLogger(__name__)

DEFAULT_OUTBOX_SIZE = 50


class NotificationSink(Protocol):
    """Anything that can deliver a notification."""

    async def notify(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        ...


@dataclass(frozen=True)
class DeliveredNotification:
    title: str
    body: str
    sent_at: datetime
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def medication_id(self) -> Optional[str]:
        return self.options.get("medication_id")


class NotificationOutbox:
    """Bounded in-memory history of delivered notifications, newest last."""

    def __init__(self, clock: Optional[Clock] = None, max_size: int = DEFAULT_OUTBOX_SIZE):
        self._clock = clock or SystemClock()
        self._items: Deque[DeliveredNotification] = deque(maxlen=max_size)

    async def notify(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(DeliveredNotification(
            title=title,
            body=body,
            sent_at=self._clock.now(),
            options=dict(options or {}),
        ))

    def recent(self, limit: Optional[int] = None) -> List[DeliveredNotification]:
        """Most recent notifications, newest first."""
        items = list(reversed(self._items))
        return items[:limit] if limit else items

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class TelegramNotificationSink:
    """Push notifications to a Telegram chat via the Bot API."""

    def __init__(self, token: str, chat_id: str, bot: Optional[Bot] = None):
        """
        Args:
            token: Bot token from @BotFather.
            chat_id: Chat that receives the reminders.
            bot: Pre-built Bot instance (tests inject a mock).
        """
        self._chat_id = chat_id
        self._bot = bot or Bot(token=token)

    async def notify(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        await self._bot.send_message(chat_id=self._chat_id, text=f"{title}\n{body}")
        logger.info("Telegram notification sent", extra={"chat_id": self._chat_id})


class CompositeNotificationSink:
    """
    Deliver to every sink in order.

    A failing sink does not stop the others. The notification counts as
    delivered once any sink accepted it; only when every sink failed is the
    first error re-raised so the caller can log it.
    """

    def __init__(self, sinks: Sequence[NotificationSink]):
        self._sinks = list(sinks)

    async def notify(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        first_error: Optional[Exception] = None
        delivered = 0
        for sink in self._sinks:
            try:
                await sink.notify(title, body, options)
                delivered += 1
            except Exception as e:
                logger.warning(f"Notification sink {type(sink).__name__} failed: {e}")
                if first_error is None:
                    first_error = e
        if not delivered and first_error is not None:
            raise first_error
