"""Application services (use cases) for commute planning."""

from commute_planner.application.services.commute_planning_service import (
    CommutePlanningService,
)
from commute_planner.application.services.dashboard_service import (
    CommuteDashboardService,
    LoadState,
    LoadStatus,
)

__all__ = [
    "CommuteDashboardService",
    "CommutePlanningService",
    "LoadState",
    "LoadStatus",
]
