"""Command line entry point: compute a commute plan and print it."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import aiohttp
from pydantic import ValidationError

from commute_planner.adapters.bike import OsrmBikeEtaProvider
from commute_planner.adapters.config import AppConfig, CommuteProfileLoader
from commute_planner.adapters.formatters import PlanFormatter, plan_to_dict
from commute_planner.adapters.mock import (
    MockBikeEtaProvider,
    MockTrafficProvider,
    MockTransitProvider,
)
from commute_planner.adapters.notifications import NoopNotificationScheduler
from commute_planner.adapters.storage import InMemoryProfileStore, JsonFileProfileStore
from commute_planner.adapters.traffic import (
    CachingTrafficProvider,
    NominatimGeocoder,
    OsrmRouteSource,
)
from commute_planner.adapters.transit import TransportRestTransitProvider, counterpart_stations_for
from commute_planner.application.services import (
    CommuteDashboardService,
    CommutePlanningService,
    LoadStatus,
)
from commute_planner.domain.models import CommuteProfile, Direction, Location, PlanningMode

logger = logging.getLogger(__name__)


def parse_target(value: str | None, timezone: str, now: datetime) -> datetime:
    """Parse a target given as HH:MM (today, local time) or an ISO 8601 timestamp.

    Without a value the target is one hour from ``now``. HH:MM values that
    already passed today refer to tomorrow.
    """
    if not value:
        return now + timedelta(hours=1)

    tz = ZoneInfo(timezone)
    if len(value) <= 5 and ":" in value:
        hours, minutes = (int(part) for part in value.split(":", 1))
        local_now = now.astimezone(tz)
        target = local_now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
        if target < local_now:
            target += timedelta(days=1)
        return target.astimezone(UTC)

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed.astimezone(UTC)


async def _seed_profile_locations(
    traffic_provider: CachingTrafficProvider, profile: CommuteProfile
) -> None:
    if profile.home_latitude is not None and profile.home_longitude is not None:
        await traffic_provider.remember_location(
            profile.home_address,
            Location(profile.home_latitude, profile.home_longitude, profile.home_address),
        )
    if profile.work_latitude is not None and profile.work_longitude is not None:
        await traffic_provider.remember_location(
            profile.work_address,
            Location(profile.work_latitude, profile.work_longitude, profile.work_address),
        )


@asynccontextmanager
async def build_planner(
    config: AppConfig, profile: CommuteProfile, use_mock: bool, now: datetime
) -> AsyncIterator[CommutePlanningService]:
    """Wire the planning service to mock or live time sources."""
    if use_mock:
        logger.info("Using offline mock time sources")
        yield CommutePlanningService(
            MockTrafficProvider(),
            MockTransitProvider(reference_now=now),
            MockBikeEtaProvider(),
            departures_limit=config.departures_limit,
        )
        return

    async with aiohttp.ClientSession() as session:
        traffic_provider = CachingTrafficProvider(
            NominatimGeocoder(
                session,
                user_agent=config.user_agent,
                base_url=config.nominatim_url,
                timeout_seconds=config.http_timeout_seconds,
            ),
            OsrmRouteSource(
                session,
                base_url=config.osrm_driving_url,
                timeout_seconds=config.http_timeout_seconds,
            ),
            normal_eta=timedelta(minutes=config.normal_car_eta_minutes),
            eta_cache_ttl=timedelta(seconds=config.eta_cache_ttl_seconds),
        )
        await _seed_profile_locations(traffic_provider, profile)
        transit_provider = TransportRestTransitProvider(
            session,
            counterpart_stations=counterpart_stations_for(
                profile.home_station, profile.work_station
            ),
            base_url=config.transit_api_url,
            timeout_seconds=config.http_timeout_seconds,
        )
        bike_provider = OsrmBikeEtaProvider(
            session,
            address_resolver=traffic_provider,
            station_resolver=transit_provider,
            base_url=config.osrm_cycling_url,
            timeout_seconds=config.http_timeout_seconds,
        )
        yield CommutePlanningService(
            traffic_provider,
            transit_provider,
            bike_provider,
            departures_limit=config.departures_limit,
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Should I drive or bike to the train, and when do I leave?"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    plan_parser = subparsers.add_parser("plan", help="Compute a commute plan")
    plan_parser.add_argument(
        "--direction",
        choices=[direction.value for direction in Direction],
        default=Direction.HOME_TO_WORK.value,
        help="Commute direction",
    )
    plan_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in PlanningMode],
        default=None,
        help="Planning mode (defaults to the profile's)",
    )
    plan_parser.add_argument(
        "--target", default=None, help="Target time as HH:MM or ISO 8601 (default: in one hour)"
    )
    plan_parser.add_argument("--profile", default=None, help="Path to the profile TOML file")
    plan_parser.add_argument("--mock", action="store_true", help="Use offline mock time sources")
    plan_parser.add_argument("--json", action="store_true", help="Output as JSON")
    return parser


async def run_plan(args: argparse.Namespace) -> int:
    """Compute and print a plan; return the process exit code."""
    try:
        config = AppConfig(profile_file=args.profile) if args.profile else AppConfig()
        default_profile = CommuteProfileLoader.load(config)
        now = datetime.now(UTC)
        target = parse_target(args.target, config.timezone, now)
    except (ValidationError, ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    profile_store = (
        JsonFileProfileStore(config.profile_store_file)
        if config.profile_store_file
        else InMemoryProfileStore()
    )

    async with build_planner(config, default_profile, args.mock, now) as planner:
        dashboard = CommuteDashboardService(
            planner, profile_store, NoopNotificationScheduler(), target_date_time=target
        )
        await dashboard.bootstrap(default_profile)
        dashboard.direction = Direction(args.direction)
        if args.mode:
            dashboard.planning_mode = PlanningMode(args.mode)
        state = await dashboard.refresh_plan(now)

    if state.status != LoadStatus.LOADED or state.plan is None:
        logger.error(state.message or "No plan computed")
        return 1

    if args.json:
        print(json.dumps(plan_to_dict(state.plan), indent=2))
    else:
        print("\n".join(PlanFormatter(config).format_plan(state.plan)))
    return 0


async def main() -> None:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(await run_plan(args))


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
