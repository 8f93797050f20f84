"""In-memory commute profile store."""

import asyncio

from commute_planner.domain.models.commute_profile import CommuteProfile
from commute_planner.domain.ports.profile_store import CommuteProfileStore


class InMemoryProfileStore(CommuteProfileStore):
    """Keep the profile for the lifetime of the process."""

    def __init__(self, profile: CommuteProfile | None = None) -> None:
        self._profile = profile
        self._lock = asyncio.Lock()

    async def load_profile(self) -> CommuteProfile | None:
        async with self._lock:
            return self._profile

    async def save_profile(self, profile: CommuteProfile) -> None:
        async with self._lock:
            self._profile = profile
