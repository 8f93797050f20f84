"""Location domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A resolved, routable location handle."""

    latitude: float
    longitude: float
    label: str = ""
