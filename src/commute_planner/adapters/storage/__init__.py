"""Commute profile stores."""

from commute_planner.adapters.storage.in_memory_profile_store import InMemoryProfileStore
from commute_planner.adapters.storage.json_file_profile_store import JsonFileProfileStore

__all__ = ["InMemoryProfileStore", "JsonFileProfileStore"]
