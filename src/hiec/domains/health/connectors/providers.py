"""Concrete data provider implementations."""

from __future__ import annotations

from datetime import date

from hiec.domains.health.connectors.mock_data import (
    get_mock_current_conditions,
    get_mock_environment_history,
    get_mock_symptom_records,
    get_mock_tomorrow_forecast,
)
from hiec.domains.health.domain_logic.insight_models import (
    EnvironmentalObservation,
    SymptomRecord,
    UserProfile,
)


class MockSymptomDataProvider:
    """Uses mock diary generators. Always available."""

    def __init__(self, *, today: date | None = None, post_menopausal: bool = False) -> None:
        self._today = today
        self._profile = UserProfile(post_menopausal=post_menopausal)

    @property
    def today(self) -> date:
        return self._today or date.today()

    async def get_symptom_records(self, days: int = 90) -> list[SymptomRecord]:
        return get_mock_symptom_records(self.today, days)

    async def get_user_profile(self) -> UserProfile:
        return self._profile

    @property
    def data_source(self) -> str:
        return "mock"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Using a simulated symptom diary. "
                "Connect the diary store for real entries."
            ),
        }


class MockEnvironmentalDataProvider:
    """Uses mock weather generators. Always available."""

    def __init__(self, *, today: date | None = None) -> None:
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    async def get_history(self, days: int = 30) -> list[EnvironmentalObservation]:
        return get_mock_environment_history(self.today, days)

    async def get_current(self) -> EnvironmentalObservation:
        return get_mock_current_conditions(self.today)

    async def get_tomorrow_forecast(self) -> EnvironmentalObservation:
        return get_mock_tomorrow_forecast(self.today)

    @property
    def data_source(self) -> str:
        return "mock"
