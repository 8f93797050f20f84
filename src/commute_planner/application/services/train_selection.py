"""Train candidate filtering, feasibility selection and timing anchors."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from commute_planner.domain.models import AttemptTimes, PlanningMode, TrainDeparture

# The traveler has to be on the platform this long before the train leaves.
FEASIBILITY_MARGIN = timedelta(seconds=60)


@dataclass(frozen=True)
class TrainSelection:
    """Train to aim for plus the next candidate after it."""

    selected: TrainDeparture
    fallback: TrainDeparture | None


def filter_candidates(
    trains: list[TrainDeparture], planning_mode: PlanningMode, target: datetime
) -> list[TrainDeparture]:
    """Restrict sorted candidates to the requested window.

    Arrive-by keeps trains arriving by the target and reverts to every
    candidate when none does. Leave-at keeps trains departing at or after
    the target.
    """
    if planning_mode == PlanningMode.ARRIVE_BY:
        before_target = [train for train in trains if train.arrival_time <= target]
        return before_target or list(trains)
    return [train for train in trains if train.departure_time >= target]


def first_feasible_train(
    trains: list[TrainDeparture], reference: datetime, bike_eta: timedelta
) -> TrainSelection:
    """Select the first train reachable from ``reference`` by bike.

    A train is reachable when the estimated arrival at the station is at least
    one minute before its departure. When none is reachable, the first
    candidate is returned anyway.

    Raises:
        ValueError: If ``trains`` is empty.
    """
    if not trains:
        raise ValueError("Expected at least one train candidate")

    arrival_at_station = reference + bike_eta
    for index, train in enumerate(trains):
        if train.departure_time - FEASIBILITY_MARGIN >= arrival_at_station:
            return TrainSelection(selected=train, fallback=_next_after(trains, index))

    return TrainSelection(selected=trains[0], fallback=_next_after(trains, 0))


def _next_after(trains: list[TrainDeparture], index: int) -> TrainDeparture | None:
    return trains[index + 1] if index + 1 < len(trains) else None


def compute_attempt_times(
    train: TrainDeparture, bike_eta: timedelta, prep_lead_time_minutes: int
) -> AttemptTimes:
    """Compute get-ready, leave and too-late instants for a selected train."""
    leave_at = train.departure_time - bike_eta
    too_late_at = train.departure_time - FEASIBILITY_MARGIN
    get_ready_at = leave_at - timedelta(minutes=prep_lead_time_minutes)
    return AttemptTimes(get_ready_at=get_ready_at, leave_at=leave_at, too_late_at=too_late_at)
