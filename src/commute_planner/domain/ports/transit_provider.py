"""Transit provider port."""

from datetime import datetime
from typing import Protocol

from commute_planner.domain.models.train_departure import TrainDeparture


class TransitProvider(Protocol):
    """Port for listing upcoming train departures."""

    async def next_trains(
        self, station: str, line: str, after: datetime, limit: int
    ) -> list[TrainDeparture]:
        """Get up to ``limit`` departures of ``line`` from ``station`` after an instant.

        Departures are ordered ascending by departure time.
        """
        ...
