"""Protocol for resolving free-text addresses."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from commute_planner.domain.models.location import Location


class AddressResolver(Protocol):
    """Protocol for turning free text into a routable location."""

    async def resolve(self, query: str) -> "Location":
        """Resolve a query to a location.

        Args:
            query: Free-text address or station identifier.

        Returns:
            The resolved location.

        Raises:
            LocationNotFoundError: If nothing matches the query.
        """
        ...
