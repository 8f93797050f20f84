"""Multimodal option domain model."""

from dataclasses import dataclass

from commute_planner.domain.models.attempt_times import AttemptTimes
from commute_planner.domain.models.train_departure import TrainDeparture


@dataclass(frozen=True)
class MultimodalOption:
    """Bike-to-train alternative: the train to aim for and when to leave for it."""

    selected_train: TrainDeparture
    attempt_times: AttemptTimes
    fallback_train: TrainDeparture | None = None
