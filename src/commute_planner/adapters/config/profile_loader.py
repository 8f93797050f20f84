"""Builds a CommuteProfile from configuration data."""

import logging
from typing import TYPE_CHECKING, Any

from commute_planner.domain.models.commute_profile import CommuteProfile
from commute_planner.domain.models.trip_request import PlanningMode

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_planner.adapters.config.app_config import AppConfig

REQUIRED_KEYS = ("home_address", "work_address", "home_station", "work_station", "train_line")
MINUTE_KEYS = (
    "bike_buffer_minutes",
    "station_safety_buffer_minutes",
    "prep_lead_time_minutes",
    "car_good_delta_minutes",
)
COORDINATE_KEYS = ("home_latitude", "home_longitude", "work_latitude", "work_longitude")


def profile_from_dict(data: dict[str, Any]) -> CommuteProfile:
    """Validate a mapping and build a profile from it.

    Raises:
        ValueError: If a required key is missing or a value is invalid.
    """
    missing = [key for key in REQUIRED_KEYS if not str(data.get(key, "")).strip()]
    if missing:
        raise ValueError(f"Profile is missing required field(s): {', '.join(missing)}")

    kwargs: dict[str, Any] = {key: str(data[key]).strip() for key in REQUIRED_KEYS}

    for key in MINUTE_KEYS:
        if key in data:
            value = data[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"Profile field '{key}' must be a non-negative integer")
            kwargs[key] = value

    for key in COORDINATE_KEYS:
        if data.get(key) is not None:
            kwargs[key] = float(data[key])

    if "default_planning_mode" in data:
        try:
            kwargs["default_planning_mode"] = PlanningMode(data["default_planning_mode"])
        except ValueError as e:
            valid = ", ".join(mode.value for mode in PlanningMode)
            raise ValueError(f"default_planning_mode must be one of: {valid}") from e

    if data.get("id"):
        kwargs["id"] = str(data["id"])

    return CommuteProfile(**kwargs)


class CommuteProfileLoader:
    """Load the commute profile from the [profile] table of the TOML config."""

    @staticmethod
    def load(config: "AppConfig") -> CommuteProfile:
        toml_data = config.load_toml_data()
        profile_data = toml_data.get("profile")
        if not isinstance(profile_data, dict):
            raise ValueError("TOML config must contain a [profile] table")

        profile = profile_from_dict(profile_data)
        logger.info(
            f"Loaded profile: {profile.home_station} <-> {profile.work_station} "
            f"on line {profile.train_line}"
        )
        return profile
