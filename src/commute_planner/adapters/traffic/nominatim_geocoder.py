"""Address resolution through the OpenStreetMap Nominatim search API."""

import logging
from typing import TYPE_CHECKING

from commute_planner.adapters.api_rate_limiter import NOMINATIM_MIN_DELAY_SECONDS
from commute_planner.adapters.http_client import JsonHttpClient
from commute_planner.domain.contracts.address_resolver import AddressResolver
from commute_planner.domain.errors import LocationNotFoundError
from commute_planner.domain.models.location import Location

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

NOMINATIM_URL = "https://nominatim.openstreetmap.org"


class NominatimGeocoder(AddressResolver):
    """Resolve free-text addresses to coordinates.

    Nominatim's usage policy requires an identifying User-Agent and at most
    one request per second.
    """

    def __init__(
        self,
        session: "ClientSession",
        user_agent: str,
        base_url: str = NOMINATIM_URL,
        timeout_seconds: float = 10,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = JsonHttpClient(
            session,
            "nominatim",
            NOMINATIM_MIN_DELAY_SECONDS,
            timeout_seconds=timeout_seconds,
            headers={"User-Agent": user_agent},
        )

    async def resolve(self, query: str) -> Location:
        """Resolve an address to the best matching location."""
        params = {"q": query, "format": "jsonv2", "limit": 1}
        results = await self._client.get_json(f"{self._base_url}/search", params=params)

        if not isinstance(results, list) or not results:
            raise LocationNotFoundError(query)

        best = results[0]
        try:
            location = Location(
                latitude=float(best["lat"]),
                longitude=float(best["lon"]),
                label=best.get("display_name", query),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LocationNotFoundError(query) from e

        logger.debug(f"Resolved '{query}' to {location.latitude},{location.longitude}")
        return location
