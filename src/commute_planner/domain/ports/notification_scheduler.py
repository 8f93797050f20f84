"""Notification scheduler port."""

from typing import Protocol

from commute_planner.domain.models.commute_plan import CommutePlan
from commute_planner.domain.models.trip_request import TripRequest


class NotificationScheduler(Protocol):
    """Port for scheduling reminders derived from a plan."""

    async def schedule(self, plan: CommutePlan, trip_request: TripRequest) -> None:
        """Schedule reminders for a plan."""
        ...

    async def cancel(self, trip_request: TripRequest) -> None:
        """Cancel reminders for a trip request."""
        ...
