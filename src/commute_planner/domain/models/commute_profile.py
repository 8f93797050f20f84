"""Commute profile domain model."""

import uuid
from dataclasses import dataclass, field, replace

from commute_planner.domain.models.trip_request import Direction, PlanningMode


def _new_profile_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class CommuteProfile:
    """Saved commute configuration for a single traveler."""

    home_address: str
    work_address: str
    home_station: str
    work_station: str
    train_line: str
    bike_buffer_minutes: int = 5  # Locking the bike, walking to the platform
    station_safety_buffer_minutes: int = 5
    prep_lead_time_minutes: int = 20  # Time to get ready before leaving
    car_good_delta_minutes: int = 10  # Allowed slack over the baseline driving time
    default_planning_mode: PlanningMode = PlanningMode.ARRIVE_BY
    home_latitude: float | None = None
    home_longitude: float | None = None
    work_latitude: float | None = None
    work_longitude: float | None = None
    id: str = field(default_factory=_new_profile_id)

    def route_for(self, direction: Direction) -> tuple[str, str, str]:
        """Return (from_address, to_address, boarding_station) for a direction."""
        if direction == Direction.HOME_TO_WORK:
            return self.home_address, self.work_address, self.home_station
        return self.work_address, self.home_address, self.work_station

    def with_addresses(
        self,
        home_address: str,
        work_address: str,
        home_latitude: float | None = None,
        home_longitude: float | None = None,
        work_latitude: float | None = None,
        work_longitude: float | None = None,
    ) -> "CommuteProfile":
        """Return a copy of the profile with edited addresses and coordinates."""
        return replace(
            self,
            home_address=home_address,
            work_address=work_address,
            home_latitude=home_latitude,
            home_longitude=home_longitude,
            work_latitude=work_latitude,
            work_longitude=work_longitude,
        )
