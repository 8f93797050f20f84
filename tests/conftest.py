"""Shared fixtures."""

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from commute_planner.adapters.api_rate_limiter import ApiRateLimiter
from commute_planner.adapters.http_client import JsonHttpClient
from commute_planner.domain.models import CommuteProfile, PlanningMode


@pytest.fixture(autouse=True)
def reset_rate_limiters() -> Iterator[None]:
    """Give every test its own rate limiter registry."""
    ApiRateLimiter.reset_registry()
    yield
    ApiRateLimiter.reset_registry()


@pytest.fixture
def no_rate_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let live adapters send requests back to back."""

    async def _unlimited(self: JsonHttpClient) -> ApiRateLimiter:
        return ApiRateLimiter(self.api_name, min_delay_seconds=0)

    monkeypatch.setattr(JsonHttpClient, "_get_rate_limiter", _unlimited)


@pytest.fixture
def now() -> datetime:
    """A fixed planning instant."""
    return datetime(2026, 3, 2, 7, 0, tzinfo=UTC)


@pytest.fixture
def profile() -> CommuteProfile:
    """Profile without bike buffer so cycling times in tests are exact."""
    return CommuteProfile(
        home_address="Home",
        work_address="Work",
        home_station="Home Station",
        work_station="Work Station",
        train_line="Blue",
        bike_buffer_minutes=0,
        station_safety_buffer_minutes=5,
        prep_lead_time_minutes=20,
        car_good_delta_minutes=10,
        default_planning_mode=PlanningMode.ARRIVE_BY,
    )

