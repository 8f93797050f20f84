"""JSON file commute profile store."""

import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path

from commute_planner.adapters.config.profile_loader import profile_from_dict
from commute_planner.domain.models.commute_profile import CommuteProfile
from commute_planner.domain.ports.profile_store import CommuteProfileStore

logger = logging.getLogger(__name__)


class JsonFileProfileStore(CommuteProfileStore):
    """Persist the profile as a JSON document."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    async def load_profile(self) -> CommuteProfile | None:
        """Load the profile, or None when nothing has been saved yet."""
        async with self._lock:
            if not self._path.exists():
                return None
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        return profile_from_dict(data)

    async def save_profile(self, profile: CommuteProfile) -> None:
        """Write the profile, replacing the file atomically."""
        async with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(asdict(profile), f, indent=2, ensure_ascii=False)
            tmp_path.replace(self._path)
        logger.info(f"Saved commute profile {profile.id} to {self._path}")
