"""Contracts consumed by the driving ETA cache."""

from commute_planner.domain.contracts.address_resolver import AddressResolver
from commute_planner.domain.contracts.driving_route_source import DrivingRouteSource

__all__ = ["AddressResolver", "DrivingRouteSource"]
