"""Offline driving ETA provider."""

from datetime import datetime, timedelta

from commute_planner.domain.models.departure_time_reference import DepartureTimeReference
from commute_planner.domain.models.trip_request import Direction
from commute_planner.domain.ports.traffic_provider import TrafficProvider


class MockTrafficProvider(TrafficProvider):
    """Return fixed current and baseline driving times."""

    def __init__(
        self,
        current_eta: timedelta = timedelta(minutes=34),
        baseline_eta: timedelta = timedelta(minutes=28),
    ) -> None:
        self.current_eta = current_eta
        self.baseline_eta = baseline_eta

    async def car_eta(
        self,
        from_address: str,  # noqa: ARG002
        to_address: str,  # noqa: ARG002
        reference: DepartureTimeReference,  # noqa: ARG002
    ) -> timedelta:
        return self.current_eta

    async def baseline_car_eta(
        self,
        direction: Direction,  # noqa: ARG002
        at: datetime,  # noqa: ARG002
    ) -> timedelta:
        return self.baseline_eta
