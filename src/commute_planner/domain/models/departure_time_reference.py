"""Departure time reference domain model."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class ReferenceKind(StrEnum):
    """Whether a driving query is anchored on departure or on arrival."""

    LEAVE_AT = "leave_at"
    ARRIVE_BY = "arrive_by"


@dataclass(frozen=True)
class DepartureTimeReference:
    """Instant a driving ETA is requested for, tagged with its meaning."""

    kind: ReferenceKind
    instant: datetime

    @classmethod
    def leave_at(cls, instant: datetime) -> "DepartureTimeReference":
        """Reference for a trip starting at the given instant."""
        return cls(kind=ReferenceKind.LEAVE_AT, instant=instant)

    @classmethod
    def arrive_by(cls, instant: datetime) -> "DepartureTimeReference":
        """Reference for a trip that has to end by the given instant."""
        return cls(kind=ReferenceKind.ARRIVE_BY, instant=instant)
