"""Transport.rest (HAFAS REST) departure adapter.

Works with the public instances, e.g. https://v6.db.transport.rest (Deutsche
Bahn) or https://v6.vbb.transport.rest (Berlin/Brandenburg).
API Documentation: https://v6.db.transport.rest/api.html
"""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from commute_planner.adapters.api_rate_limiter import TRANSPORT_REST_MIN_DELAY_SECONDS
from commute_planner.adapters.http_client import JsonHttpClient
from commute_planner.domain.contracts.address_resolver import AddressResolver
from commute_planner.domain.errors import LocationNotFoundError
from commute_planner.domain.models.location import Location
from commute_planner.domain.models.train_departure import TrainDeparture
from commute_planner.domain.ports.transit_provider import TransitProvider

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

TRANSPORT_REST_URL = "https://v6.db.transport.rest"
# Window fetched per request; long enough to hold `limit` trains of a line
DEPARTURES_DURATION_MINUTES = 120


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _matches_line(line_data: dict[str, Any], line: str) -> bool:
    wanted = line.strip().lower()
    names = (line_data.get("name"), line_data.get("id"), line_data.get("fahrtNr"))
    return any(isinstance(name, str) and name.strip().lower() == wanted for name in names)


class TransportRestTransitProvider(TransitProvider, AddressResolver):
    """Train departures and station locations from a transport.rest API.

    The arrival time of a departure is taken from its stopover at the
    counterpart station (home station for trains leaving the work station and
    vice versa). Without such a stopover the trip's last stop is used.
    """

    def __init__(
        self,
        session: "ClientSession",
        counterpart_stations: dict[str, str] | None = None,
        base_url: str = TRANSPORT_REST_URL,
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize the provider.

        Args:
            session: Shared aiohttp session.
            counterpart_stations: Boarding station ID -> alighting station ID.
            base_url: Base URL of the transport.rest instance.
            timeout_seconds: Timeout of a single request.
        """
        self._base_url = base_url.rstrip("/")
        self._counterpart_stations = counterpart_stations or {}
        self._client = JsonHttpClient(
            session,
            "transport_rest",
            TRANSPORT_REST_MIN_DELAY_SECONDS,
            timeout_seconds=timeout_seconds,
        )

    async def next_trains(
        self, station: str, line: str, after: datetime, limit: int
    ) -> list[TrainDeparture]:
        """Get the next departures of a line from a station."""
        params: dict[str, Any] = {
            "when": after.astimezone(UTC).isoformat(),
            "duration": DEPARTURES_DURATION_MINUTES,
            "results": 100,
            "stopovers": "true",
            "remarks": "false",
        }
        data = await self._client.get_json(f"{self._base_url}/stops/{station}/departures", params)

        # v6 wraps departures in an object, older instances return a bare list
        departures_data = data.get("departures", []) if isinstance(data, dict) else data
        alighting_station = self._counterpart_stations.get(station)

        trains = []
        for dep_data in departures_data or []:
            if not isinstance(dep_data, dict) or dep_data.get("cancelled"):
                continue
            if not _matches_line(dep_data.get("line") or {}, line):
                continue
            try:
                train = self._parse_departure(dep_data, alighting_station)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping unparsable departure {dep_data.get('tripId')}: {e}")
                continue
            if train is not None and train.departure_time >= after:
                trains.append(train)

        trains.sort(key=lambda train: train.departure_time)
        logger.debug(f"{len(trains)} departure(s) of {line} from {station} after {after}")
        return trains[:limit]

    @staticmethod
    def _parse_departure(
        dep_data: dict[str, Any], alighting_station: str | None
    ) -> TrainDeparture | None:
        departure_time = _parse_time(dep_data.get("when") or dep_data.get("plannedWhen"))
        if departure_time is None:
            return None

        arrival_time: datetime | None = None
        last_arrival: datetime | None = None
        for stopover in dep_data.get("nextStopovers") or []:
            stop_arrival = _parse_time(stopover.get("arrival") or stopover.get("plannedArrival"))
            if stop_arrival is None or stop_arrival <= departure_time:
                continue
            last_arrival = stop_arrival
            stop_id = str((stopover.get("stop") or {}).get("id", ""))
            if alighting_station and stop_id == alighting_station:
                arrival_time = stop_arrival
                break

        platform = dep_data.get("platform") or dep_data.get("plannedPlatform")
        return TrainDeparture(
            trip_id=str(dep_data.get("tripId", "")),
            departure_time=departure_time,
            arrival_time=arrival_time or last_arrival or departure_time,
            delay_seconds=int(dep_data.get("delay") or 0),
            platform=str(platform) if platform is not None else None,
        )

    async def resolve(self, query: str) -> Location:
        """Resolve a station ID to its location."""
        data = await self._client.get_json(f"{self._base_url}/stops/{query}")
        location = data.get("location") if isinstance(data, dict) else None
        if not location or "latitude" not in location or "longitude" not in location:
            raise LocationNotFoundError(query)
        return Location(
            latitude=float(location["latitude"]),
            longitude=float(location["longitude"]),
            label=data.get("name", query),
        )


def counterpart_stations_for(home_station: str, work_station: str) -> dict[str, str]:
    """Build the boarding -> alighting station map for a commute."""
    return {home_station: work_station, work_station: home_station}
