"""Attempt times domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AttemptTimes:
    """Derived instants that drive the commute state machine.

    Always ordered as get_ready_at <= leave_at < too_late_at.
    """

    get_ready_at: datetime
    leave_at: datetime
    too_late_at: datetime
