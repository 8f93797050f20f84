"""Configuration adapters."""

from commute_planner.adapters.config.app_config import AppConfig
from commute_planner.adapters.config.profile_loader import CommuteProfileLoader, profile_from_dict

__all__ = ["AppConfig", "CommuteProfileLoader", "profile_from_dict"]
