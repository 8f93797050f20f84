"""Offline cycling ETA provider."""

from datetime import datetime, timedelta

from commute_planner.domain.ports.bike_eta_provider import BikeEtaProvider


class MockBikeEtaProvider(BikeEtaProvider):
    """Return a fixed cycling time."""

    def __init__(self, eta: timedelta = timedelta(minutes=8)) -> None:
        self.eta = eta

    async def bike_eta(
        self,
        from_address: str,  # noqa: ARG002
        to: str,  # noqa: ARG002
        at: datetime,  # noqa: ARG002
    ) -> timedelta:
        return self.eta
