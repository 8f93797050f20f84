"""Caching, failure-tolerant driving ETA provider."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from commute_planner.domain.contracts.address_resolver import AddressResolver
from commute_planner.domain.ports.traffic_provider import TrafficProvider

if TYPE_CHECKING:
    from commute_planner.domain.contracts.driving_route_source import DrivingRouteSource
    from commute_planner.domain.models.departure_time_reference import (
        DepartureTimeReference,
        ReferenceKind,
    )
    from commute_planner.domain.models.location import Location
    from commute_planner.domain.models.trip_request import Direction

logger = logging.getLogger(__name__)

DEFAULT_NORMAL_ETA = timedelta(minutes=35)
DEFAULT_ETA_CACHE_TTL = timedelta(seconds=45)


def normalize_address(value: str) -> str:
    """Normalize an address for use as a cache key."""
    return value.strip().lower()


@dataclass(frozen=True)
class RouteKey:
    """ETA cache key: both ends, the reference minute and the reference kind."""

    from_address: str
    to_address: str
    reference_minute_bucket: int
    kind: ReferenceKind

    @classmethod
    def for_request(
        cls, from_address: str, to_address: str, reference: DepartureTimeReference
    ) -> RouteKey:
        return cls(
            from_address=normalize_address(from_address),
            to_address=normalize_address(to_address),
            reference_minute_bucket=int(reference.instant.timestamp() // 60),
            kind=reference.kind,
        )


@dataclass(frozen=True)
class CachedEta:
    value: timedelta
    cached_at: datetime


@dataclass(frozen=True)
class CacheStats:
    """Sizes of the cache tables and the latest known-good ETA."""

    addresses: int
    etas: int
    latest_car_eta: timedelta


class CachingTrafficProvider(TrafficProvider, AddressResolver):
    """Driving ETA provider in front of a slow, rate-limited routing source.

    Resolved addresses are kept for the lifetime of the provider. ETAs are
    kept per route, reference minute and reference kind, and count as fresh
    for ``eta_cache_ttl``. A failed lookup never raises: the latest
    known-good ETA is returned and cached under the requested key instead.

    All cache state is read and written under one lock, which is released
    while the routing source is queried.
    """

    def __init__(
        self,
        address_resolver: AddressResolver,
        route_source: DrivingRouteSource,
        normal_eta: timedelta = DEFAULT_NORMAL_ETA,
        eta_cache_ttl: timedelta = DEFAULT_ETA_CACHE_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            address_resolver: Live address resolution source.
            route_source: Live driving time source.
            normal_eta: Fallback and baseline ETA until a live lookup succeeds.
            eta_cache_ttl: How long a cached ETA is served without a new lookup.
            clock: Source of the current instant, for tests.
        """
        self._address_resolver = address_resolver
        self._route_source = route_source
        self._eta_cache_ttl = eta_cache_ttl
        self._clock = clock or (lambda: datetime.now(UTC))
        self._lock = asyncio.Lock()
        self._location_cache: dict[str, Location] = {}
        self._eta_cache: dict[RouteKey, CachedEta] = {}
        self._latest_car_eta = normal_eta

    async def car_eta(
        self, from_address: str, to_address: str, reference: DepartureTimeReference
    ) -> timedelta:
        """Get the driving time, from cache when fresh, falling back on failure."""
        now = self._clock()
        key = RouteKey.for_request(from_address, to_address, reference)

        async with self._lock:
            cached = self._eta_cache.get(key)
            if cached is not None and now - cached.cached_at <= self._eta_cache_ttl:
                self._latest_car_eta = cached.value
                logger.debug(f"ETA cache hit for {key}")
                return cached.value

        logger.debug(f"ETA cache miss for {key}")
        try:
            source = await self.resolve(from_address)
            destination = await self.resolve(to_address)
            eta = await self._route_source.driving_time(source, destination, reference)
        except Exception as e:
            async with self._lock:
                fallback = self._latest_car_eta
                self._eta_cache[key] = CachedEta(value=fallback, cached_at=now)
            logger.warning(f"Live driving ETA unavailable ({e}), using last known {fallback}")
            return fallback

        async with self._lock:
            self._latest_car_eta = eta
            self._eta_cache[key] = CachedEta(value=eta, cached_at=now)
        return eta

    async def baseline_car_eta(
        self,
        direction: Direction,  # noqa: ARG002
        at: datetime,  # noqa: ARG002
    ) -> timedelta:
        """Get the baseline driving time.

        The latest known-good ETA stands in for normal conditions.
        """
        async with self._lock:
            return self._latest_car_eta

    async def resolve(self, query: str) -> Location:
        """Resolve an address, memoized by normalized text."""
        normalized = normalize_address(query)
        async with self._lock:
            cached = self._location_cache.get(normalized)
        if cached is not None:
            return cached

        location = await self._address_resolver.resolve(query)
        async with self._lock:
            # Keep the first resolution if a concurrent caller won the race
            return self._location_cache.setdefault(normalized, location)

    async def remember_location(self, address: str, location: Location) -> None:
        """Seed the address table with an already known location."""
        async with self._lock:
            self._location_cache[normalize_address(address)] = location

    async def stats(self) -> CacheStats:
        """Return a consistent snapshot of the cache sizes."""
        async with self._lock:
            return CacheStats(
                addresses=len(self._location_cache),
                etas=len(self._eta_cache),
                latest_car_eta=self._latest_car_eta,
            )
