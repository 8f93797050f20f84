"""Transit departure adapters."""

from commute_planner.adapters.transit.transport_rest_transit_provider import (
    TransportRestTransitProvider,
    counterpart_stations_for,
)

__all__ = ["TransportRestTransitProvider", "counterpart_stations_for"]
