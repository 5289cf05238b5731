"""Correlation / prediction / alert pipeline over resolved environmental data."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from hiec.domains.health.domain_logic.alert_generator import generate_alerts
from hiec.domains.health.domain_logic.environmental_correlation import (
    analyze_environmental_correlations,
)
from hiec.domains.health.domain_logic.insight_models import (
    EnvironmentalObservation,
    EnvironmentalReport,
    SymptomRecord,
)
from hiec.domains.health.domain_logic.symptom_predictor import predict_tomorrow


def run_environmental_analysis(
    records: Sequence[SymptomRecord],
    history: Sequence[EnvironmentalObservation],
    current: EnvironmentalObservation | None,
    tomorrow: EnvironmentalObservation | None,
    now: datetime,
) -> EnvironmentalReport:
    """Compose correlations, tomorrow's prediction and alerts.

    All inputs must already be fetched; nothing here touches the network.
    """
    return EnvironmentalReport(
        insights=tuple(analyze_environmental_correlations(records, history)),
        prediction=predict_tomorrow(records, tomorrow),
        alerts=tuple(generate_alerts(current, tomorrow, now)),
    )
