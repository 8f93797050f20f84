"""Tests for the commute planning engine."""

import asyncio
from datetime import datetime, timedelta

import pytest

from commute_planner.adapters.mock import (
    MockBikeEtaProvider,
    MockTrafficProvider,
    MockTransitProvider,
)
from commute_planner.application.services import CommutePlanningService
from commute_planner.domain.errors import NoTrainDataError, ProviderResponseError
from commute_planner.domain.models import (
    CommuteProfile,
    CommuteState,
    DepartureTimeReference,
    Direction,
    ModePreference,
    PlanningMode,
    TrainDeparture,
    TripRequest,
    derive_commute_state,
)
from tests.fakes import RecordingProviders


def _train(
    trip_id: str, now: datetime, departs_in: timedelta, arrives_in: timedelta
) -> TrainDeparture:
    return TrainDeparture(
        trip_id=trip_id, departure_time=now + departs_in, arrival_time=now + arrives_in
    )


def _request(
    now: datetime,
    target_in: timedelta,
    planning_mode: PlanningMode = PlanningMode.ARRIVE_BY,
    direction: Direction = Direction.HOME_TO_WORK,
) -> TripRequest:
    return TripRequest(
        direction=direction,
        mode_preference=ModePreference.AUTO,
        planning_mode=planning_mode,
        target_date_time=now + target_in,
    )


def _planner(
    trains: list[TrainDeparture],
    bike_eta: timedelta,
    car_eta: timedelta = timedelta(minutes=30),
    baseline_eta: timedelta = timedelta(minutes=25),
) -> CommutePlanningService:
    return CommutePlanningService(
        traffic_provider=MockTrafficProvider(current_eta=car_eta, baseline_eta=baseline_eta),
        transit_provider=MockTransitProvider(departures=trains),
        bike_provider=MockBikeEtaProvider(eta=bike_eta),
    )


class TestTrainFeasibility:
    """Tests for selecting the train to aim for."""

    @pytest.mark.asyncio
    async def test_when_first_train_misses_one_minute_rule_then_next_is_selected(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given arrival 30s before the first train, when planning, then the second train is chosen."""
        planner = _planner(
            [
                _train("T1", now, timedelta(minutes=9, seconds=30), timedelta(minutes=30)),
                _train("T2", now, timedelta(minutes=12), timedelta(minutes=35)),
            ],
            bike_eta=timedelta(minutes=9),
        )

        plan = await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

        assert plan.multimodal_option.selected_train.trip_id == "T2"
        assert plan.multimodal_option.fallback_train is None

    @pytest.mark.asyncio
    async def test_when_arrival_exactly_one_minute_early_then_train_is_feasible(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given arrival exactly 60s before departure, when planning, then that train is chosen."""
        planner = _planner(
            [
                _train("T1", now, timedelta(minutes=10), timedelta(minutes=30)),
                _train("T2", now, timedelta(minutes=20), timedelta(minutes=40)),
            ],
            bike_eta=timedelta(minutes=9),
        )

        plan = await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

        assert plan.multimodal_option.selected_train.trip_id == "T1"
        assert plan.multimodal_option.fallback_train is not None
        assert plan.multimodal_option.fallback_train.trip_id == "T2"

    @pytest.mark.asyncio
    async def test_when_no_train_is_reachable_then_first_candidate_is_selected(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given every train leaves too soon, when planning, then the first one is still the target."""
        planner = _planner(
            [
                _train("T1", now, timedelta(minutes=3), timedelta(minutes=20)),
                _train("T2", now, timedelta(minutes=5), timedelta(minutes=22)),
            ],
            bike_eta=timedelta(minutes=15),
        )

        plan = await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

        assert plan.multimodal_option.selected_train.trip_id == "T1"
        assert plan.multimodal_option.fallback_train is not None
        assert plan.multimodal_option.fallback_train.trip_id == "T2"
        assert plan.state == CommuteState.LEAVE_NOW

    @pytest.mark.asyncio
    async def test_bike_buffer_is_added_to_cycling_time(self, now: datetime) -> None:
        """Given a bike buffer, when planning, then it counts towards reaching the station."""
        buffered = CommuteProfile(
            home_address="Home",
            work_address="Work",
            home_station="Home Station",
            work_station="Work Station",
            train_line="Blue",
            bike_buffer_minutes=5,
        )
        planner = _planner(
            [
                _train("T1", now, timedelta(minutes=12), timedelta(minutes=30)),
                _train("T2", now, timedelta(minutes=27), timedelta(minutes=45)),
            ],
            bike_eta=timedelta(minutes=8),
        )

        plan = await planner.compute_plan(buffered, _request(now, timedelta(hours=1)), now)

        assert plan.multimodal_option.selected_train.trip_id == "T2"
        assert plan.multimodal_option.attempt_times.leave_at == (
            now + timedelta(minutes=27) - timedelta(minutes=13)
        )

    @pytest.mark.asyncio
    async def test_unsorted_departures_are_sorted_before_selection(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given departures out of order, when planning, then the earliest feasible one wins."""
        providers = RecordingProviders(
            [
                _train("Late", now, timedelta(minutes=30), timedelta(minutes=50)),
                _train("Early", now, timedelta(minutes=15), timedelta(minutes=35)),
            ]
        )
        planner = CommutePlanningService(providers, providers, providers)

        plan = await planner.compute_plan(profile, _request(now, timedelta(hours=1)), now)

        assert plan.multimodal_option.selected_train.trip_id == "Early"
        assert plan.multimodal_option.fallback_train is not None
        assert plan.multimodal_option.fallback_train.trip_id == "Late"


class TestAttemptTimes:
    """Tests for the timing anchors of the selected train."""

    @pytest.mark.asyncio
    async def test_arrive_by_anchors_follow_selected_train(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given a selected train, when planning, then anchors derive from its departure."""
        selected = _train("T10", now, timedelta(minutes=20), timedelta(minutes=42))
        planner = _planner([selected], bike_eta=timedelta(minutes=8))

        plan = await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

        attempts = plan.multimodal_option.attempt_times
        assert attempts.too_late_at == selected.departure_time - timedelta(seconds=60)
        assert attempts.leave_at == selected.departure_time - timedelta(minutes=8)
        assert attempts.get_ready_at == attempts.leave_at - timedelta(minutes=20)
        assert attempts.get_ready_at <= attempts.leave_at < attempts.too_late_at


class TestPlanningModes:
    """Tests for candidate filtering by planning mode."""

    @pytest.mark.asyncio
    async def test_leave_at_excludes_trains_before_requested_departure(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given a leave-at request, when planning, then earlier trains are skipped."""
        planner = _planner(
            [
                _train("TooEarly", now, timedelta(minutes=8), timedelta(minutes=28)),
                _train("Good", now, timedelta(minutes=17), timedelta(minutes=37)),
            ],
            bike_eta=timedelta(minutes=6),
            car_eta=timedelta(minutes=18),
            baseline_eta=timedelta(minutes=20),
        )
        request = _request(now, timedelta(minutes=10), planning_mode=PlanningMode.LEAVE_AT)

        plan = await planner.compute_plan(profile, request, now)

        assert plan.multimodal_option.selected_train.trip_id == "Good"

    @pytest.mark.asyncio
    async def test_leave_at_checks_feasibility_from_requested_departure(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given a leave-at request, when a train is unreachable from that time, then the next is chosen."""
        planner = _planner(
            [
                _train("Tight", now, timedelta(minutes=12), timedelta(minutes=30)),
                _train("Reachable", now, timedelta(minutes=25), timedelta(minutes=45)),
            ],
            bike_eta=timedelta(minutes=6),
        )
        request = _request(now, timedelta(minutes=10), planning_mode=PlanningMode.LEAVE_AT)

        plan = await planner.compute_plan(profile, request, now)

        assert plan.multimodal_option.selected_train.trip_id == "Reachable"

    @pytest.mark.asyncio
    async def test_leave_at_without_later_trains_raises_no_train_data(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given only trains before the requested departure, when planning, then no train data."""
        planner = _planner(
            [_train("TooEarly", now, timedelta(minutes=8), timedelta(minutes=28))],
            bike_eta=timedelta(minutes=6),
        )
        request = _request(now, timedelta(minutes=30), planning_mode=PlanningMode.LEAVE_AT)

        with pytest.raises(NoTrainDataError):
            await planner.compute_plan(profile, request, now)

    @pytest.mark.asyncio
    async def test_arrive_by_prefers_trains_arriving_before_target(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given one train arriving too late, when planning arrive-by, then it is not chosen."""
        planner = _planner(
            [
                _train("OnTime", now, timedelta(minutes=15), timedelta(minutes=40)),
                _train("Late", now, timedelta(minutes=25), timedelta(minutes=50)),
            ],
            bike_eta=timedelta(minutes=5),
        )

        plan = await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

        assert plan.multimodal_option.selected_train.trip_id == "OnTime"
        assert plan.multimodal_option.fallback_train is None

    @pytest.mark.asyncio
    async def test_arrive_by_without_train_arriving_in_time_uses_all_candidates(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given no train arrives by the target, when planning, then one arriving later is still chosen.

        This pins the "better than nothing" policy: the plan can target a
        train that arrives after the requested arrival time.
        """
        planner = _planner(
            [
                _train("Late", now, timedelta(minutes=15), timedelta(minutes=50)),
                _train("Later", now, timedelta(minutes=30), timedelta(minutes=65)),
            ],
            bike_eta=timedelta(minutes=5),
        )
        request = _request(now, timedelta(minutes=40))

        plan = await planner.compute_plan(profile, request, now)

        assert plan.multimodal_option.selected_train.trip_id == "Late"
        assert plan.multimodal_option.selected_train.arrival_time > request.target_date_time


class TestCarOption:
    """Tests for the traffic comparison."""

    @pytest.mark.asyncio
    async def test_when_eta_exceeds_baseline_plus_delta_then_traffic_is_bad(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given 33m against 22m + 10m, when planning, then traffic is not good."""
        planner = CommutePlanningService(
            MockTrafficProvider(
                current_eta=timedelta(minutes=33), baseline_eta=timedelta(minutes=22)
            ),
            MockTransitProvider(reference_now=now),
            MockBikeEtaProvider(),
        )
        request = _request(now, timedelta(hours=1), direction=Direction.WORK_TO_HOME)

        plan = await planner.compute_plan(profile, request, now)

        assert plan.car_option.is_traffic_good is False
        assert plan.car_option.reason == "Traffic exceeds baseline threshold"
        assert plan.car_option.eta == timedelta(minutes=33)
        assert plan.car_option.baseline_eta == timedelta(minutes=22)

    @pytest.mark.asyncio
    async def test_when_eta_equals_baseline_plus_delta_then_traffic_is_good(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given 32m against 22m + 10m, when planning, then traffic is good."""
        planner = CommutePlanningService(
            MockTrafficProvider(
                current_eta=timedelta(minutes=32), baseline_eta=timedelta(minutes=22)
            ),
            MockTransitProvider(reference_now=now),
            MockBikeEtaProvider(),
        )

        plan = await planner.compute_plan(profile, _request(now, timedelta(hours=1)), now)

        assert plan.car_option.is_traffic_good is True
        assert plan.car_option.reason == "Traffic is within threshold"


class TestPlanAssembly:
    """Tests for the assembled plan and the lookups behind it."""

    @pytest.mark.asyncio
    async def test_default_mock_timetable_produces_consistent_plan(self, now: datetime) -> None:
        """Given default mocks and profile, when planning, then state matches the plan's own anchors."""
        default_profile = CommuteProfile(
            home_address="Home",
            work_address="Work",
            home_station="Home Station",
            work_station="Work Station",
            train_line="Blue",
        )
        planner = CommutePlanningService(
            MockTrafficProvider(), MockTransitProvider(reference_now=now), MockBikeEtaProvider()
        )

        plan = await planner.compute_plan(default_profile, _request(now, timedelta(hours=1)), now)

        assert plan.generated_at == now
        assert plan.multimodal_option.selected_train.trip_id == "T-002"
        assert plan.multimodal_option.fallback_train is not None
        assert plan.multimodal_option.fallback_train.trip_id == "T-003"
        assert plan.state == CommuteState.ON_TRACK
        assert plan.state == derive_commute_state(
            plan.generated_at,
            plan.multimodal_option.attempt_times,
            plan.multimodal_option.selected_train.departure_time,
        )

    @pytest.mark.asyncio
    async def test_work_to_home_uses_work_side_of_profile(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given the work-to-home direction, when planning, then lookups start at work."""
        providers = RecordingProviders(
            [_train("T1", now, timedelta(minutes=40), timedelta(minutes=60))]
        )
        planner = CommutePlanningService(providers, providers, providers, departures_limit=5)
        request = _request(
            now,
            timedelta(minutes=30),
            planning_mode=PlanningMode.LEAVE_AT,
            direction=Direction.WORK_TO_HOME,
        )

        await planner.compute_plan(profile, request, now)

        assert providers.car_calls == [
            ("Work", "Home", DepartureTimeReference.leave_at(request.target_date_time))
        ]
        assert providers.baseline_calls == [(Direction.WORK_TO_HOME, now)]
        assert providers.bike_calls == [("Work", "Work Station", now)]
        assert providers.train_calls == [("Work Station", "Blue", now, 5)]

    @pytest.mark.asyncio
    async def test_arrive_by_request_uses_arrive_by_reference(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given an arrive-by request, when planning, then driving is asked for an arrival time."""
        providers = RecordingProviders(
            [_train("T1", now, timedelta(minutes=20), timedelta(minutes=40))]
        )
        planner = CommutePlanningService(providers, providers, providers)
        request = _request(now, timedelta(minutes=45))

        await planner.compute_plan(profile, request, now)

        assert providers.car_calls == [
            ("Home", "Work", DepartureTimeReference.arrive_by(request.target_date_time))
        ]
        assert providers.train_calls == [("Home Station", "Blue", now, 8)]


class TestFailures:
    """Tests for failures of the planning call."""

    @pytest.mark.asyncio
    async def test_when_no_departures_then_raises_no_train_data(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given an empty timetable, when planning, then NoTrainDataError is raised."""
        planner = _planner([], bike_eta=timedelta(minutes=8))

        with pytest.raises(NoTrainDataError):
            await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

    @pytest.mark.asyncio
    async def test_when_transit_fails_then_error_propagates_and_siblings_are_cancelled(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given a failing transit source, when planning, then the error surfaces unwrapped."""
        bike_cancelled = asyncio.Event()

        class SlowBike:
            async def bike_eta(self, from_address: str, to: str, at: datetime) -> timedelta:
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    bike_cancelled.set()
                    raise
                return timedelta(minutes=8)

        class BrokenTransit:
            async def next_trains(
                self, station: str, line: str, after: datetime, limit: int
            ) -> list[TrainDeparture]:
                raise ProviderResponseError("transport_rest", 503, "unavailable")

        planner = CommutePlanningService(MockTrafficProvider(), BrokenTransit(), SlowBike())

        with pytest.raises(ProviderResponseError):
            await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)
        assert bike_cancelled.is_set()

    @pytest.mark.asyncio
    async def test_when_caller_cancels_then_lookups_are_cancelled(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given an abandoned planning call, when cancelled, then in-flight lookups stop."""
        started = asyncio.Event()
        cancelled = asyncio.Event()

        class HangingTransit:
            async def next_trains(
                self, station: str, line: str, after: datetime, limit: int
            ) -> list[TrainDeparture]:
                started.set()
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    cancelled.set()
                    raise
                return []

        planner = CommutePlanningService(
            MockTrafficProvider(), HangingTransit(), MockBikeEtaProvider()
        )
        task = asyncio.create_task(
            planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)
        )
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert cancelled.is_set()


class TestConcurrency:
    """Tests for the concurrent fan-out."""

    @pytest.mark.asyncio
    async def test_all_four_lookups_are_in_flight_together(
        self, profile: CommuteProfile, now: datetime
    ) -> None:
        """Given lookups that wait for each other, when planning, then all complete."""
        expected = 4
        in_flight = 0
        all_started = asyncio.Event()

        async def rendezvous() -> None:
            nonlocal in_flight
            in_flight += 1
            if in_flight == expected:
                all_started.set()
            await asyncio.wait_for(all_started.wait(), timeout=2)

        class Rendezvous:
            async def car_eta(self, *args: object) -> timedelta:
                await rendezvous()
                return timedelta(minutes=30)

            async def baseline_car_eta(self, *args: object) -> timedelta:
                await rendezvous()
                return timedelta(minutes=25)

            async def bike_eta(self, *args: object) -> timedelta:
                await rendezvous()
                return timedelta(minutes=8)

            async def next_trains(self, *args: object) -> list[TrainDeparture]:
                await rendezvous()
                return [_train("T1", now, timedelta(minutes=20), timedelta(minutes=40))]

        providers = Rendezvous()
        planner = CommutePlanningService(providers, providers, providers)

        plan = await planner.compute_plan(profile, _request(now, timedelta(minutes=45)), now)

        assert plan.multimodal_option.selected_train.trip_id == "T1"
