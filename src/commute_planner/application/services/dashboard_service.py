"""Dashboard use case: keeps the current profile and the latest plan."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING

from commute_planner.domain.errors import NoTrainDataError
from commute_planner.domain.models import (
    CommutePlan,
    CommuteProfile,
    Direction,
    ModePreference,
    PlanningMode,
    TripRequest,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_planner.domain.ports import CommuteProfileStore, NotificationScheduler, Planner

MISSING_PROFILE_MESSAGE = "Missing commute profile"
NO_TRAIN_DATA_MESSAGE = "No train data available. Try again later."
PLAN_FAILED_MESSAGE = "Failed to compute commute plan"


class LoadStatus(StrEnum):
    """Lifecycle of the dashboard's plan."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState:
    """Current plan, or why there is none."""

    status: LoadStatus
    plan: CommutePlan | None = None
    message: str | None = None


class CommuteDashboardService:
    """Drive planning for a presentation layer.

    Owns the traveler's profile and the selected direction, planning mode and
    target instant, and exposes the latest outcome as a ``LoadState``.
    """

    def __init__(
        self,
        planner: "Planner",
        profile_store: "CommuteProfileStore",
        notifications: "NotificationScheduler",
        planning_mode: PlanningMode = PlanningMode.ARRIVE_BY,
        direction: Direction = Direction.HOME_TO_WORK,
        target_date_time: datetime | None = None,
    ) -> None:
        self._planner = planner
        self._profile_store = profile_store
        self._notifications = notifications
        self._profile: CommuteProfile | None = None
        self.planning_mode = planning_mode
        self.direction = direction
        self.target_date_time = target_date_time or datetime.now(UTC) + timedelta(hours=1)
        self.load_state = LoadState(status=LoadStatus.IDLE)

    async def bootstrap(self, default_profile: CommuteProfile) -> None:
        """Adopt the saved profile, or save and adopt ``default_profile``."""
        saved = await self._profile_store.load_profile()
        if saved is not None:
            logger.info(f"Loaded saved commute profile {saved.id}")
            self._profile = saved
        else:
            logger.info("No saved commute profile, using default")
            self._profile = default_profile
            await self._profile_store.save_profile(default_profile)
        self.planning_mode = self._profile.default_planning_mode

    async def refresh_plan(self, now: datetime | None = None) -> LoadState:
        """Compute a new plan for the current selection and schedule reminders."""
        if self._profile is None:
            self.load_state = LoadState(status=LoadStatus.FAILED, message=MISSING_PROFILE_MESSAGE)
            return self.load_state

        self.load_state = LoadState(status=LoadStatus.LOADING)
        request = TripRequest(
            direction=self.direction,
            mode_preference=ModePreference.AUTO,
            planning_mode=self.planning_mode,
            target_date_time=self.target_date_time,
        )

        try:
            plan = await self._planner.compute_plan(
                self._profile, request, now or datetime.now(UTC)
            )
        except NoTrainDataError as e:
            logger.warning(f"No train data: {e}")
            self.load_state = LoadState(status=LoadStatus.FAILED, message=NO_TRAIN_DATA_MESSAGE)
            return self.load_state
        except Exception as e:
            logger.error(f"Failed to compute commute plan: {e}", exc_info=True)
            self.load_state = LoadState(status=LoadStatus.FAILED, message=PLAN_FAILED_MESSAGE)
            return self.load_state

        self.load_state = LoadState(status=LoadStatus.LOADED, plan=plan)
        await self._notifications.schedule(plan, request)
        return self.load_state

    def current_profile(self) -> CommuteProfile | None:
        """Return the profile in use, if bootstrapped."""
        return self._profile

    async def update_addresses(
        self,
        home_address: str,
        work_address: str,
        home_latitude: float | None = None,
        home_longitude: float | None = None,
        work_latitude: float | None = None,
        work_longitude: float | None = None,
    ) -> None:
        """Edit the profile's addresses and persist the edited profile."""
        if self._profile is None:
            return
        self._profile = self._profile.with_addresses(
            home_address=home_address,
            work_address=work_address,
            home_latitude=home_latitude,
            home_longitude=home_longitude,
            work_latitude=work_latitude,
            work_longitude=work_longitude,
        )
        await self._profile_store.save_profile(self._profile)
