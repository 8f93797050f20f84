"""Notification scheduler adapters."""

from commute_planner.adapters.notifications.noop_notification_scheduler import (
    NoopNotificationScheduler,
)

__all__ = ["NoopNotificationScheduler"]
