"""Error taxonomy for commute planning."""


class PlannerError(Exception):
    """Base class for failures of a planning call."""


class NoTrainDataError(PlannerError):
    """No train departure candidates are available for the requested window."""

    def __init__(self, message: str = "No train departures available") -> None:
        super().__init__(message)


class ProviderError(Exception):
    """Base class for failures of a time source or address source."""


class LocationNotFoundError(ProviderError):
    """Free-text address could not be resolved to a location."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"No location found for '{query}'")


class NoRouteError(ProviderError):
    """Routing source returned no route between two locations."""


class ProviderResponseError(ProviderError):
    """Remote API answered with an error or could not be reached."""

    def __init__(self, api_name: str, status: int | None, detail: str = "") -> None:
        self.api_name = api_name
        self.status = status
        self.detail = detail
        status_text = f"status {status}" if status is not None else "no response"
        super().__init__(f"{api_name} request failed ({status_text}): {detail[:200]}")
