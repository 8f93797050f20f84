"""Traffic provider port."""

from datetime import datetime, timedelta
from typing import Protocol

from commute_planner.domain.models.departure_time_reference import DepartureTimeReference
from commute_planner.domain.models.trip_request import Direction


class TrafficProvider(Protocol):
    """Port for driving ETA lookups."""

    async def car_eta(
        self, from_address: str, to_address: str, reference: DepartureTimeReference
    ) -> timedelta:
        """Get the driving time between two addresses at a reference instant."""
        ...

    async def baseline_car_eta(self, direction: Direction, at: datetime) -> timedelta:
        """Get the normal, non-congested driving time for a direction."""
        ...
