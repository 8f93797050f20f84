"""Cycling times from an OSRM server with a bicycle profile."""

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from commute_planner.adapters.api_rate_limiter import OSRM_MIN_DELAY_SECONDS
from commute_planner.adapters.http_client import JsonHttpClient
from commute_planner.adapters.traffic.osrm_route_source import fetch_osrm_duration
from commute_planner.domain.ports.bike_eta_provider import BikeEtaProvider

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from commute_planner.domain.contracts.address_resolver import AddressResolver

# FOSSGIS instance; its bike router is served under the "driving" profile name
OSRM_CYCLING_URL = "https://routing.openstreetmap.de/routed-bike"


class OsrmBikeEtaProvider(BikeEtaProvider):
    """Bike ETA from an address to a station.

    Errors propagate: there is no sensible stand-in for a cycling estimate.
    """

    def __init__(
        self,
        session: "ClientSession",
        address_resolver: "AddressResolver",
        station_resolver: "AddressResolver",
        base_url: str = OSRM_CYCLING_URL,
        profile: str = "driving",
        timeout_seconds: float = 10,
    ) -> None:
        self._address_resolver = address_resolver
        self._station_resolver = station_resolver
        self._base_url = base_url
        self._profile = profile
        self._client = JsonHttpClient(
            session, "osrm_cycling", OSRM_MIN_DELAY_SECONDS, timeout_seconds=timeout_seconds
        )

    async def bike_eta(
        self,
        from_address: str,
        to: str,
        at: datetime,  # noqa: ARG002
    ) -> timedelta:
        """Get the cycling time from an address to a station."""
        source = await self._address_resolver.resolve(from_address)
        station = await self._station_resolver.resolve(to)
        eta = await fetch_osrm_duration(
            self._client, self._base_url, self._profile, source, station
        )
        logger.debug(f"Cycling {from_address} -> {to}: {eta}")
        return eta
