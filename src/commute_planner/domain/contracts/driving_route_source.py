"""Protocol for live driving route lookups."""

from datetime import timedelta
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from commute_planner.domain.models.departure_time_reference import DepartureTimeReference
    from commute_planner.domain.models.location import Location


class DrivingRouteSource(Protocol):
    """Protocol for a slow, rate-limited driving routing source."""

    async def driving_time(
        self,
        source: "Location",
        destination: "Location",
        reference: "DepartureTimeReference",
    ) -> timedelta:
        """Get the expected driving time between two locations.

        Raises:
            NoRouteError: If the source has no route between the locations.
        """
        ...
