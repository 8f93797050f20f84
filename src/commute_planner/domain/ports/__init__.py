"""Ports (interfaces) for the ports-and-adapters architecture."""

from commute_planner.domain.ports.bike_eta_provider import BikeEtaProvider
from commute_planner.domain.ports.notification_scheduler import NotificationScheduler
from commute_planner.domain.ports.planner import Planner
from commute_planner.domain.ports.profile_store import CommuteProfileStore
from commute_planner.domain.ports.traffic_provider import TrafficProvider
from commute_planner.domain.ports.transit_provider import TransitProvider

__all__ = [
    "BikeEtaProvider",
    "CommuteProfileStore",
    "NotificationScheduler",
    "Planner",
    "TrafficProvider",
    "TransitProvider",
]
