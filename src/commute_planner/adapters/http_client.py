"""Rate-limited JSON-over-HTTP client shared by the live adapters."""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from commute_planner.adapters.api_rate_limiter import ApiRateLimiter
from commute_planner.adapters.api_request_logger import log_api_request
from commute_planner.domain.errors import ProviderResponseError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_HEADERS = {"Accept": "application/json"}


class JsonHttpClient:
    """GET JSON documents from one API, one request at a time."""

    def __init__(
        self,
        session: "ClientSession",
        api_name: str,
        min_delay_seconds: float,
        timeout_seconds: float = 10,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            api_name: Name used for the shared rate limiter and in errors.
            min_delay_seconds: Minimum delay between two requests to the API.
            timeout_seconds: Total timeout of a single request.
            headers: Extra headers sent with every request.
        """
        self._session = session
        self.api_name = api_name
        self._min_delay_seconds = min_delay_seconds
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                self.api_name, self._min_delay_seconds
            )
        return self._rate_limiter

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Fetch and decode a JSON document.

        Raises:
            ProviderResponseError: On a non-200 status, an unreachable API or
                a body that is not JSON.
        """
        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire()
        log_api_request("GET", url, params=params, headers=self._headers)

        try:
            async with self._session.get(
                url, params=params, headers=self._headers, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    body = await response.text()
                    logger.warning(f"{self.api_name} returned status {response.status}")
                    raise ProviderResponseError(self.api_name, response.status, body)
                return await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise ProviderResponseError(self.api_name, None, str(e)) from e
