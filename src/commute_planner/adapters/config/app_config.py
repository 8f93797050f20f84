"""12-factor configuration adapter using environment variables and a TOML profile."""

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from commute_planner.adapters.bike.osrm_bike_eta_provider import OSRM_CYCLING_URL
from commute_planner.adapters.traffic.nominatim_geocoder import NOMINATIM_URL
from commute_planner.adapters.traffic.osrm_route_source import OSRM_DRIVING_URL
from commute_planner.adapters.transit.transport_rest_transit_provider import TRANSPORT_REST_URL


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Profile
    profile_file: str | None = Field(
        default="commute.example.toml",
        description="Path to the TOML file holding the [profile] table",
    )
    profile_store_file: str | None = Field(
        default=None,
        description="Optional JSON file where the edited profile is persisted",
    )

    # Planning
    departures_limit: int = Field(
        default=8, description="Number of upcoming departures considered per plan"
    )
    eta_cache_ttl_seconds: int = Field(
        default=45, description="Seconds a cached driving ETA is served without a new lookup"
    )
    normal_car_eta_minutes: int = Field(
        default=35,
        description="Driving time assumed until the first successful live lookup",
    )

    # Live sources
    nominatim_url: str = Field(default=NOMINATIM_URL, description="Nominatim base URL")
    osrm_driving_url: str = Field(default=OSRM_DRIVING_URL, description="OSRM car router URL")
    osrm_cycling_url: str = Field(default=OSRM_CYCLING_URL, description="OSRM bike router URL")
    transit_api_url: str = Field(
        default=TRANSPORT_REST_URL, description="transport.rest instance for departures"
    )
    http_timeout_seconds: int = Field(default=10, description="Timeout for API requests")
    user_agent: str = Field(
        default="commute-planner/0.1",
        description="User-Agent sent to Nominatim (required by its usage policy)",
    )

    # Display
    timezone: str = Field(
        default="Europe/Berlin",
        description="Timezone for displaying plan times (IANA timezone name)",
    )

    @field_validator("departures_limit", "eta_cache_ttl_seconds", "normal_car_eta_minutes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate that counts and durations are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be an IANA timezone name, got '{v}'") from e
        return v

    def load_toml_data(self) -> dict[str, Any]:
        """Load and parse the profile TOML file."""
        if not self.profile_file:
            raise ValueError("profile_file must be set to load the commute profile")

        config_path = Path(self.profile_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)
