"""Offline time sources for tests and demos."""

from commute_planner.adapters.mock.mock_bike_eta_provider import MockBikeEtaProvider
from commute_planner.adapters.mock.mock_traffic_provider import MockTrafficProvider
from commute_planner.adapters.mock.mock_transit_provider import (
    MockTransitProvider,
    sample_departures,
)

__all__ = [
    "MockBikeEtaProvider",
    "MockTrafficProvider",
    "MockTransitProvider",
    "sample_departures",
]
