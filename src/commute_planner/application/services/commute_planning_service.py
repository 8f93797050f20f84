"""Commute planning engine."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from commute_planner.application.services.train_selection import (
    compute_attempt_times,
    filter_candidates,
    first_feasible_train,
)
from commute_planner.domain.errors import NoTrainDataError
from commute_planner.domain.models import (
    CarOption,
    CommutePlan,
    CommuteProfile,
    MultimodalOption,
    PlanningMode,
    TripRequest,
    derive_commute_state,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_planner.domain.ports import BikeEtaProvider, TrafficProvider, TransitProvider

DEFAULT_DEPARTURES_LIMIT = 8

TRAFFIC_GOOD_REASON = "Traffic is within threshold"
TRAFFIC_BAD_REASON = "Traffic exceeds baseline threshold"


class CommutePlanningService:
    """Compute car versus bike-and-train plans from three time sources."""

    def __init__(
        self,
        traffic_provider: "TrafficProvider",
        transit_provider: "TransitProvider",
        bike_provider: "BikeEtaProvider",
        departures_limit: int = DEFAULT_DEPARTURES_LIMIT,
    ) -> None:
        """Initialize with the time sources the plan is built from.

        Args:
            traffic_provider: Driving ETA source, normally the ETA cache.
            transit_provider: Departure listing source.
            bike_provider: Cycling ETA source.
            departures_limit: How many upcoming departures to consider.
        """
        self._traffic_provider = traffic_provider
        self._transit_provider = transit_provider
        self._bike_provider = bike_provider
        self._departures_limit = departures_limit

    async def compute_plan(
        self, profile: CommuteProfile, trip_request: TripRequest, now: datetime
    ) -> CommutePlan:
        """Compute a plan for one trip request.

        The four lookups run concurrently. If any of them fails the remaining
        ones are cancelled and the error propagates; no partial plan is built.

        Raises:
            NoTrainDataError: If no train candidates are available.
        """
        from_address, to_address, station = profile.route_for(trip_request.direction)
        reference = trip_request.time_reference()

        try:
            async with asyncio.TaskGroup() as group:
                car_task = group.create_task(
                    self._traffic_provider.car_eta(from_address, to_address, reference)
                )
                baseline_task = group.create_task(
                    self._traffic_provider.baseline_car_eta(trip_request.direction, now)
                )
                bike_task = group.create_task(
                    self._bike_provider.bike_eta(from_address, station, now)
                )
                trains_task = group.create_task(
                    self._transit_provider.next_trains(
                        station, profile.train_line, now, self._departures_limit
                    )
                )
        except ExceptionGroup as group_error:
            raise group_error.exceptions[0] from group_error

        car_eta = car_task.result()
        baseline_eta = baseline_task.result()
        bike_eta = bike_task.result() + timedelta(minutes=profile.bike_buffer_minutes)
        trains = sorted(trains_task.result(), key=lambda train: train.departure_time)

        if not trains:
            raise NoTrainDataError(f"No departures for line {profile.train_line} at {station}")

        target = trip_request.target_date_time
        candidates = filter_candidates(trains, trip_request.planning_mode, target)
        if not candidates:
            raise NoTrainDataError(f"No departures at or after {target.isoformat()}")
        logger.debug(
            f"{len(candidates)} of {len(trains)} departure(s) in window: "
            f"{[train.trip_id for train in candidates]}"
        )

        selection_reference = (
            now if trip_request.planning_mode == PlanningMode.ARRIVE_BY else target
        )
        selection = first_feasible_train(candidates, selection_reference, bike_eta)
        attempt_times = compute_attempt_times(
            selection.selected, bike_eta, profile.prep_lead_time_minutes
        )
        state = derive_commute_state(now, attempt_times, selection.selected.departure_time)

        car_option = self._car_option(car_eta, baseline_eta, profile.car_good_delta_minutes)
        logger.info(
            f"Planned {trip_request.direction}: train {selection.selected.trip_id} "
            f"at {selection.selected.departure_time.isoformat()}, state={state}, "
            f"car traffic good={car_option.is_traffic_good}"
        )

        return CommutePlan(
            generated_at=now,
            car_option=car_option,
            multimodal_option=MultimodalOption(
                selected_train=selection.selected,
                attempt_times=attempt_times,
                fallback_train=selection.fallback,
            ),
            state=state,
        )

    @staticmethod
    def _car_option(eta: timedelta, baseline_eta: timedelta, delta_minutes: int) -> CarOption:
        is_good = eta <= baseline_eta + timedelta(minutes=delta_minutes)
        return CarOption(
            eta=eta,
            baseline_eta=baseline_eta,
            is_traffic_good=is_good,
            reason=TRAFFIC_GOOD_REASON if is_good else TRAFFIC_BAD_REASON,
        )
