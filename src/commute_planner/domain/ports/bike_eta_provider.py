"""Bike ETA provider port."""

from datetime import datetime, timedelta
from typing import Protocol


class BikeEtaProvider(Protocol):
    """Port for cycling ETA lookups."""

    async def bike_eta(self, from_address: str, to: str, at: datetime) -> timedelta:
        """Get the cycling time from an address to a station."""
        ...
