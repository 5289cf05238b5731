"""Health data connectors: abstraction layer for diary, profile and weather retrieval."""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable

from hiec.domains.health.domain_logic.insight_models import (
    EnvironmentalObservation,
    SymptomRecord,
    UserProfile,
)


class EnvironmentalDataError(Exception):
    """Raised when the weather / air-quality source is unavailable."""


@runtime_checkable
class SymptomDataProvider(Protocol):
    """Abstract interface for symptom diary and profile retrieval.

    Tools call these methods without knowing whether data comes from a
    remote record store or mock generators.
    """

    async def get_symptom_records(self, days: int = 90) -> list[SymptomRecord]:
        """Diary records for the last ``days`` days, oldest first."""
        ...

    async def get_user_profile(self) -> UserProfile:
        """Coarse onboarding profile (menopause phase flag)."""
        ...

    @property
    def today(self) -> date:
        """Last diary day the provider serves; period windows end here."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source, e.g. 'mock'."""
        ...

    def get_provenance(self) -> dict[str, str]:
        """Return provenance metadata suitable for merging into a response."""
        ...


@runtime_checkable
class EnvironmentalDataProvider(Protocol):
    """Abstract interface for weather and air-quality retrieval.

    Implementations raise EnvironmentalDataError on network or availability
    failures.
    """

    async def get_history(self, days: int = 30) -> list[EnvironmentalObservation]:
        """One observation per day for the last ``days`` days, oldest first."""
        ...

    async def get_current(self) -> EnvironmentalObservation:
        """Current conditions."""
        ...

    async def get_tomorrow_forecast(self) -> EnvironmentalObservation:
        """Forecast snapshot for tomorrow."""
        ...

    @property
    def data_source(self) -> str:
        ...
