"""Driving times from an OSRM routing server."""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from commute_planner.adapters.api_rate_limiter import OSRM_MIN_DELAY_SECONDS
from commute_planner.adapters.http_client import JsonHttpClient
from commute_planner.domain.contracts.driving_route_source import DrivingRouteSource
from commute_planner.domain.errors import NoRouteError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from commute_planner.domain.models.departure_time_reference import DepartureTimeReference
    from commute_planner.domain.models.location import Location

OSRM_DRIVING_URL = "https://router.project-osrm.org"


async def fetch_osrm_duration(
    client: JsonHttpClient,
    base_url: str,
    profile: str,
    source: "Location",
    destination: "Location",
) -> timedelta:
    """Query the OSRM route service and return the first route's duration.

    Raises:
        NoRouteError: If OSRM finds no route.
    """
    # OSRM expects lon,lat pairs
    coordinates = (
        f"{source.longitude},{source.latitude};{destination.longitude},{destination.latitude}"
    )
    url = f"{base_url.rstrip('/')}/route/v1/{profile}/{coordinates}"
    data = await client.get_json(url, params={"overview": "false"})

    routes = data.get("routes") if isinstance(data, dict) else None
    if not routes or data.get("code") not in (None, "Ok"):
        raise NoRouteError(f"{client.api_name} has no route from {source} to {destination}")
    try:
        return timedelta(seconds=float(routes[0]["duration"]))
    except (KeyError, TypeError, ValueError) as e:
        raise NoRouteError(f"{client.api_name} returned a route without duration") from e


class OsrmRouteSource(DrivingRouteSource):
    """Driving route source backed by OSRM.

    OSRM has no traffic model, so the time reference does not change the
    result.
    """

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = OSRM_DRIVING_URL,
        profile: str = "driving",
        timeout_seconds: float = 10,
    ) -> None:
        self._base_url = base_url
        self._profile = profile
        self._client = JsonHttpClient(
            session, "osrm_driving", OSRM_MIN_DELAY_SECONDS, timeout_seconds=timeout_seconds
        )

    async def driving_time(
        self,
        source: "Location",
        destination: "Location",
        reference: "DepartureTimeReference",
    ) -> timedelta:
        """Get the driving time between two locations."""
        logger.debug(f"Routing {source.label} -> {destination.label} ({reference.kind})")
        return await fetch_osrm_duration(
            self._client, self._base_url, self._profile, source, destination
        )
