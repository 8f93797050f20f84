"""Rate limiting for outgoing requests to public routing and transit APIs.

Nominatim allows one request per second and the public OSRM and transport.rest
instances ask for similar restraint, so every live adapter spaces its requests
through a limiter shared by API name.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import ClassVar

logger = logging.getLogger(__name__)

NOMINATIM_MIN_DELAY_SECONDS = 1.0
OSRM_MIN_DELAY_SECONDS = 0.5
TRANSPORT_REST_MIN_DELAY_SECONDS = 0.6  # 100 requests/minute


class ApiRateLimiter:
    """Enforce a minimum delay between requests to one API.

    Waiting callers are serialized with an ``asyncio.Lock``.
    """

    _instances: ClassVar[dict[str, ApiRateLimiter]] = {}
    _registry_lock: ClassVar[asyncio.Lock | None] = None

    def __init__(self, api_name: str, min_delay_seconds: float = 1.0) -> None:
        """Initialize the rate limiter.

        Args:
            api_name: Name of the API (for logging).
            min_delay_seconds: Minimum delay between requests in seconds.
        """
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    @classmethod
    async def get_instance(cls, api_name: str, min_delay_seconds: float = 1.0) -> ApiRateLimiter:
        """Get the limiter shared by every adapter talking to ``api_name``."""
        if cls._registry_lock is None:
            cls._registry_lock = asyncio.Lock()

        async with cls._registry_lock:
            limiter = cls._instances.get(api_name)
            if limiter is None:
                limiter = cls(api_name, min_delay_seconds)
                cls._instances[api_name] = limiter
                logger.info(f"Rate limiting {api_name} to one request per {min_delay_seconds}s")
            return limiter

    @classmethod
    def reset_registry(cls) -> None:
        """Forget all shared limiters."""
        cls._instances.clear()
        cls._registry_lock = None

    async def acquire(self) -> None:
        """Wait until the next request to the API is allowed."""
        async with self._lock:
            if self._last_request_time is not None:
                wait_time = self.min_delay_seconds - (time.monotonic() - self._last_request_time)
                if wait_time > 0:
                    logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                    await asyncio.sleep(wait_time)
            self._last_request_time = time.monotonic()

    async def __aenter__(self) -> ApiRateLimiter:
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: Exception | None, _exc_tb: object
    ) -> None:
        return None
