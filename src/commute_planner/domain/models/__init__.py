"""Domain models for commute planning."""

from commute_planner.domain.models.attempt_times import AttemptTimes
from commute_planner.domain.models.car_option import CarOption
from commute_planner.domain.models.commute_plan import (
    CommutePlan,
    CommuteState,
    derive_commute_state,
)
from commute_planner.domain.models.commute_profile import CommuteProfile
from commute_planner.domain.models.departure_time_reference import (
    DepartureTimeReference,
    ReferenceKind,
)
from commute_planner.domain.models.location import Location
from commute_planner.domain.models.multimodal_option import MultimodalOption
from commute_planner.domain.models.train_departure import TrainDeparture
from commute_planner.domain.models.trip_request import (
    Direction,
    ModePreference,
    PlanningMode,
    TripRequest,
)

__all__ = [
    "AttemptTimes",
    "CarOption",
    "CommutePlan",
    "CommuteProfile",
    "CommuteState",
    "DepartureTimeReference",
    "Direction",
    "Location",
    "ModePreference",
    "MultimodalOption",
    "PlanningMode",
    "ReferenceKind",
    "TrainDeparture",
    "TripRequest",
    "derive_commute_state",
]
