"""
Medication reminders: scheduler, notification sinks and the polling loop.
"""
from services.reminders.notifications import (
    CompositeNotificationSink,
    DeliveredNotification,
    NotificationOutbox,
    NotificationSink,
    TelegramNotificationSink,
)
from services.reminders.scheduler import REMINDER_TITLE, ReminderScheduler, reminder_body
from services.reminders.loop import ReminderLoop

__all__ = [
    'CompositeNotificationSink',
    'DeliveredNotification',
    'NotificationOutbox',
    'NotificationSink',
    'TelegramNotificationSink',
    'REMINDER_TITLE',
    'ReminderScheduler',
    'reminder_body',
    'ReminderLoop',
]
