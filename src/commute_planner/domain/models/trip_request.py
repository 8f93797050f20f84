"""Trip request domain model."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from commute_planner.domain.models.departure_time_reference import DepartureTimeReference


class Direction(StrEnum):
    """Which way the traveler is commuting."""

    HOME_TO_WORK = "home_to_work"
    WORK_TO_HOME = "work_to_home"


class PlanningMode(StrEnum):
    """Whether the target instant is a desired arrival or a desired departure."""

    ARRIVE_BY = "arrive_by"
    LEAVE_AT = "leave_at"


class ModePreference(StrEnum):
    """Preferred mode of transport (informational only)."""

    CAR = "car"
    MULTIMODAL = "multimodal"
    AUTO = "auto"


@dataclass(frozen=True)
class TripRequest:
    """A single planning query."""

    direction: Direction
    mode_preference: ModePreference
    planning_mode: PlanningMode
    target_date_time: datetime

    def time_reference(self) -> DepartureTimeReference:
        """Build the driving time reference for this request."""
        if self.planning_mode == PlanningMode.ARRIVE_BY:
            return DepartureTimeReference.arrive_by(self.target_date_time)
        return DepartureTimeReference.leave_at(self.target_date_time)
