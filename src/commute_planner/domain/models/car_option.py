"""Car option domain model."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class CarOption:
    """Driving alternative compared against its baseline."""

    eta: timedelta
    baseline_eta: timedelta
    is_traffic_good: bool
    reason: str
