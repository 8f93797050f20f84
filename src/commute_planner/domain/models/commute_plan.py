"""Commute plan domain model and the commute state machine."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from commute_planner.domain.models.attempt_times import AttemptTimes
from commute_planner.domain.models.car_option import CarOption
from commute_planner.domain.models.multimodal_option import MultimodalOption


class CommuteState(StrEnum):
    """Urgency of the multimodal option at a given instant."""

    ON_TRACK = "on_track"
    LEAVE_NOW = "leave_now"
    TOO_LATE = "too_late"
    ROLLED_TO_NEXT_TRAIN = "rolled_to_next_train"


def derive_commute_state(
    now: datetime, attempt_times: AttemptTimes, departure_time: datetime
) -> CommuteState:
    """Derive the commute state for an instant.

    Rules are evaluated in order and the first match wins.

    Args:
        now: Instant to evaluate.
        attempt_times: Anchors computed for the selected train.
        departure_time: Departure of the selected train.

    Returns:
        The commute state at ``now``.
    """
    if now > attempt_times.too_late_at:
        return CommuteState.ROLLED_TO_NEXT_TRAIN
    if now >= attempt_times.leave_at:
        return CommuteState.LEAVE_NOW
    if now >= attempt_times.get_ready_at:
        return CommuteState.ON_TRACK
    # Shadowed by the first rule since too_late_at precedes the departure
    if now >= departure_time:
        return CommuteState.TOO_LATE
    return CommuteState.ON_TRACK


@dataclass(frozen=True)
class CommutePlan:
    """Immutable result of one planning call."""

    generated_at: datetime
    car_option: CarOption
    multimodal_option: MultimodalOption
    state: CommuteState

    def at(self, now: datetime) -> "CommutePlan":
        """Return a new plan re-evaluated at ``now``; this plan is left untouched."""
        state = derive_commute_state(
            now,
            self.multimodal_option.attempt_times,
            self.multimodal_option.selected_train.departure_time,
        )
        return replace(self, generated_at=now, state=state)
