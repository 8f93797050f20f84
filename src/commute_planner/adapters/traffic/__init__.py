"""Driving ETA adapters."""

from commute_planner.adapters.traffic.caching_traffic_provider import CachingTrafficProvider
from commute_planner.adapters.traffic.nominatim_geocoder import NominatimGeocoder
from commute_planner.adapters.traffic.osrm_route_source import OsrmRouteSource

__all__ = ["CachingTrafficProvider", "NominatimGeocoder", "OsrmRouteSource"]
