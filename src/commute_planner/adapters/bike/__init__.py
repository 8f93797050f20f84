"""Cycling ETA adapters."""

from commute_planner.adapters.bike.osrm_bike_eta_provider import OsrmBikeEtaProvider

__all__ = ["OsrmBikeEtaProvider"]
