"""Planner port."""

from datetime import datetime
from typing import Protocol

from commute_planner.domain.models.commute_plan import CommutePlan
from commute_planner.domain.models.commute_profile import CommuteProfile
from commute_planner.domain.models.trip_request import TripRequest


class Planner(Protocol):
    """Port for computing commute plans."""

    async def compute_plan(
        self, profile: CommuteProfile, trip_request: TripRequest, now: datetime
    ) -> CommutePlan:
        """Compute a fresh plan for a trip request."""
        ...
