"""Domain layer - core business logic and models."""

from commute_planner.domain.models import (
    CommutePlan,
    CommuteProfile,
    CommuteState,
    TrainDeparture,
    TripRequest,
)
from commute_planner.domain.ports import (
    BikeEtaProvider,
    Planner,
    TrafficProvider,
    TransitProvider,
)

__all__ = [
    "BikeEtaProvider",
    "CommutePlan",
    "CommuteProfile",
    "CommuteState",
    "Planner",
    "TrafficProvider",
    "TrainDeparture",
    "TransitProvider",
    "TripRequest",
]
