"""Formatter for commute plans."""

from datetime import datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from commute_planner.adapters.config.app_config import AppConfig
from commute_planner.domain.models.commute_plan import CommutePlan, CommuteState
from commute_planner.domain.models.train_departure import TrainDeparture

STATE_HEADLINES = {
    CommuteState.ON_TRACK: "On track",
    CommuteState.LEAVE_NOW: "Leave now",
    CommuteState.TOO_LATE: "Too late",
    CommuteState.ROLLED_TO_NEXT_TRAIN: "Train missed, aim for the next one",
}


class PlanFormatter:
    """Render plans as text lines in the configured timezone."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with the display timezone.
        """
        self._timezone = ZoneInfo(config.timezone)

    def format_clock(self, instant: datetime) -> str:
        """Format an instant as local HH:MM."""
        return instant.astimezone(self._timezone).strftime("%H:%M")

    @staticmethod
    def format_duration(delta: timedelta) -> str:
        """Format a duration compactly, e.g. '1h5m', '34m', '<1m'."""
        total_seconds = int(delta.total_seconds())
        if total_seconds < 60:
            return "<1m"
        hours, minutes = divmod(total_seconds // 60, 60)
        if hours == 0:
            return f"{minutes}m"
        if minutes == 0:
            return f"{hours}h"
        return f"{hours}h{minutes}m"

    def format_train(self, train: TrainDeparture) -> str:
        """Format a train as 'HH:MM -> HH:MM (trip, platform, delay)'."""
        details = [train.trip_id]
        if train.platform:
            details.append(f"platform {train.platform}")
        if train.delay_seconds > 0:
            details.append(f"+{self.format_duration(timedelta(seconds=train.delay_seconds))}")
        return (
            f"{self.format_clock(train.departure_time)} -> "
            f"{self.format_clock(train.arrival_time)} ({', '.join(details)})"
        )

    def format_plan(self, plan: CommutePlan) -> list[str]:
        """Format a whole plan, one line per fact."""
        car = plan.car_option
        multimodal = plan.multimodal_option
        attempts = multimodal.attempt_times

        lines = [
            f"{STATE_HEADLINES[plan.state]} (as of {self.format_clock(plan.generated_at)})",
            f"Train:      {self.format_train(multimodal.selected_train)}",
            f"Get ready:  {self.format_clock(attempts.get_ready_at)}",
            f"Leave:      {self.format_clock(attempts.leave_at)}",
            f"Too late:   {self.format_clock(attempts.too_late_at)}",
        ]
        if multimodal.fallback_train is not None:
            lines.append(f"Fallback:   {self.format_train(multimodal.fallback_train)}")
        lines.append(
            f"Car:        {self.format_duration(car.eta)} "
            f"(normal {self.format_duration(car.baseline_eta)}) - {car.reason}"
        )
        return lines


def _train_to_dict(train: TrainDeparture | None) -> dict[str, Any] | None:
    if train is None:
        return None
    return {
        "trip_id": train.trip_id,
        "departure_time": train.departure_time.isoformat(),
        "arrival_time": train.arrival_time.isoformat(),
        "delay_seconds": train.delay_seconds,
        "platform": train.platform,
    }


def plan_to_dict(plan: CommutePlan) -> dict[str, Any]:
    """Render a plan as JSON-serialisable data."""
    attempts = plan.multimodal_option.attempt_times
    return {
        "generated_at": plan.generated_at.isoformat(),
        "state": plan.state.value,
        "car_option": {
            "eta_seconds": plan.car_option.eta.total_seconds(),
            "baseline_eta_seconds": plan.car_option.baseline_eta.total_seconds(),
            "is_traffic_good": plan.car_option.is_traffic_good,
            "reason": plan.car_option.reason,
        },
        "multimodal_option": {
            "selected_train": _train_to_dict(plan.multimodal_option.selected_train),
            "fallback_train": _train_to_dict(plan.multimodal_option.fallback_train),
            "attempt_times": {
                "get_ready_at": attempts.get_ready_at.isoformat(),
                "leave_at": attempts.leave_at.isoformat(),
                "too_late_at": attempts.too_late_at.isoformat(),
            },
        },
    }
