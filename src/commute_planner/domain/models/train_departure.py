"""Train departure domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TrainDeparture:
    """A single scheduled train service from the boarding station."""

    trip_id: str
    departure_time: datetime
    arrival_time: datetime
    delay_seconds: int = 0
    platform: str | None = None
