"""Offline departure listing provider."""

from datetime import UTC, datetime, timedelta

from commute_planner.domain.models.train_departure import TrainDeparture
from commute_planner.domain.ports.transit_provider import TransitProvider


def sample_departures(reference_now: datetime) -> list[TrainDeparture]:
    """Three trains a quarter of an hour apart, starting 12 minutes after ``reference_now``."""
    return [
        TrainDeparture(
            trip_id="T-001",
            departure_time=reference_now + timedelta(minutes=12),
            arrival_time=reference_now + timedelta(minutes=36),
            platform="1",
        ),
        TrainDeparture(
            trip_id="T-002",
            departure_time=reference_now + timedelta(minutes=27),
            arrival_time=reference_now + timedelta(minutes=51),
            platform="2",
        ),
        TrainDeparture(
            trip_id="T-003",
            departure_time=reference_now + timedelta(minutes=42),
            arrival_time=reference_now + timedelta(minutes=66),
            platform="2",
        ),
    ]


class MockTransitProvider(TransitProvider):
    """Serve departures from a fixed timetable."""

    def __init__(
        self,
        departures: list[TrainDeparture] | None = None,
        reference_now: datetime | None = None,
    ) -> None:
        """Initialize with a timetable.

        Args:
            departures: Timetable to serve. Defaults to ``sample_departures``.
            reference_now: Anchor of the default timetable (defaults to now).
        """
        if departures is None:
            departures = sample_departures(reference_now or datetime.now(UTC))
        self.departures = departures

    async def next_trains(
        self,
        station: str,  # noqa: ARG002
        line: str,  # noqa: ARG002
        after: datetime,
        limit: int,
    ) -> list[TrainDeparture]:
        upcoming = [train for train in self.departures if train.departure_time >= after]
        upcoming.sort(key=lambda train: train.departure_time)
        return upcoming[:limit]
