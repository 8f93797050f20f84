"""Adapters layer - external system integrations."""

from commute_planner.adapters.config import AppConfig
from commute_planner.adapters.mock import (
    MockBikeEtaProvider,
    MockTrafficProvider,
    MockTransitProvider,
)
from commute_planner.adapters.traffic import CachingTrafficProvider

__all__ = [
    "AppConfig",
    "CachingTrafficProvider",
    "MockBikeEtaProvider",
    "MockTrafficProvider",
    "MockTransitProvider",
]
