"""Commute profile store port."""

from typing import Protocol

from commute_planner.domain.models.commute_profile import CommuteProfile


class CommuteProfileStore(Protocol):
    """Port for persisting the traveler's commute profile."""

    async def load_profile(self) -> CommuteProfile | None:
        """Load the saved profile, if any."""
        ...

    async def save_profile(self, profile: CommuteProfile) -> None:
        """Persist a profile, replacing any saved one."""
        ...
