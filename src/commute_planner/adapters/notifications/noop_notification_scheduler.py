"""Notification scheduler that schedules nothing."""

from commute_planner.domain.models.commute_plan import CommutePlan
from commute_planner.domain.models.trip_request import TripRequest
from commute_planner.domain.ports.notification_scheduler import NotificationScheduler


class NoopNotificationScheduler(NotificationScheduler):
    """Accept scheduling requests and drop them."""

    async def schedule(self, plan: CommutePlan, trip_request: TripRequest) -> None:
        return None

    async def cancel(self, trip_request: TripRequest) -> None:
        return None
