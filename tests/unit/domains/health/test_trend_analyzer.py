"""Tests for week-over-week symptom trend analysis."""

from __future__ import annotations

import pytest

from hiec.domains.health.domain_logic.insight_models import (
    SymptomCategory,
    TrendDirection,
    TrendShape,
)
from hiec.domains.health.domain_logic.trend_analyzer import (
    TREND_RECOMMENDATIONS,
    classify_shape,
    compute_trends,
)


class TestClassifyShape:
    @pytest.mark.parametrize("values,expected", [
        ([], TrendShape.INSUFFICIENT_DATA),
        ([1, 2], TrendShape.INSUFFICIENT_DATA),
        ([3, 3, 3], TrendShape.MONOTONIC_INCREASE),
        ([1, 1, 2, 3], TrendShape.MONOTONIC_INCREASE),
        ([5, 4, 4, 1], TrendShape.MONOTONIC_DECREASE),
        ([1, 5, 1, 5], TrendShape.VOLATILE),
        ([2, 3, 2], TrendShape.STABLE),
    ])
    def test_shapes(self, values, expected):
        assert classify_shape(values) == expected

    def test_variance_boundary_is_stable(self):
        # population variance of [0, 2, 0, 2] is exactly 1.0
        assert classify_shape([0, 2, 0, 2]) == TrendShape.STABLE


class TestComputeTrends:
    def test_fewer_than_fourteen_records(self, make_records):
        assert compute_trends(make_records(13)) == []
        assert compute_trends([]) == []

    def test_rising_hot_flashes_are_worsening(self, make_records):
        records = make_records(hot_flashes=[0] * 7 + [0, 1, 2, 3, 4, 5, 6])
        hot_flashes, sleep = compute_trends(records)

        assert hot_flashes.symptom == SymptomCategory.HOT_FLASHES
        assert hot_flashes.symptom_name == "Hot flashes"
        assert hot_flashes.current_week_average == 3.0
        assert hot_flashes.previous_week_average == 0.0
        assert hot_flashes.direction == TrendDirection.WORSENING
        assert hot_flashes.shape == TrendShape.MONOTONIC_INCREASE
        assert hot_flashes.recommendations == TREND_RECOMMENDATIONS[
            (SymptomCategory.HOT_FLASHES, TrendDirection.WORSENING)
        ]

        assert sleep.symptom_name == "Sleep quality"
        assert sleep.direction == TrendDirection.STABLE
        assert sleep.shape == TrendShape.MONOTONIC_INCREASE

    def test_unchanged_fortnight_is_stable(self, make_records):
        trends = compute_trends(make_records(14, hot_flashes=2, sleep=3))
        assert [t.direction for t in trends] == [TrendDirection.STABLE, TrendDirection.STABLE]
        assert [t.shape for t in trends] == [TrendShape.MONOTONIC_INCREASE] * 2

    def test_better_sleep_is_improving(self, make_records):
        records = make_records(sleep=[2] * 7 + [4] * 7)
        sleep = compute_trends(records)[1]
        assert sleep.direction == TrendDirection.IMPROVING
        assert sleep.recommendations == TREND_RECOMMENDATIONS[
            (SymptomCategory.SLEEP_QUALITY, TrendDirection.IMPROVING)
        ]

    def test_fewer_hot_flashes_are_improving(self, make_records):
        records = make_records(hot_flashes=[4] * 7 + [1] * 7)
        assert compute_trends(records)[0].direction == TrendDirection.IMPROVING

    def test_worse_sleep_is_worsening(self, make_records):
        records = make_records(sleep=[4] * 7 + [4, 3, 3, 2, 2, 1, 1])
        sleep = compute_trends(records)[1]
        assert sleep.direction == TrendDirection.WORSENING
        assert sleep.shape == TrendShape.MONOTONIC_DECREASE

    def test_only_last_two_weeks_are_compared(self, make_records):
        records = make_records(hot_flashes=[9] * 10 + [1] * 14)
        assert compute_trends(records)[0].direction == TrendDirection.STABLE

    def test_averages_are_rounded_to_tenths(self, make_records):
        records = make_records(hot_flashes=[0] * 7 + [1, 0, 0, 0, 0, 0, 0])
        trend = compute_trends(records)[0]
        assert trend.current_week_average == 0.1
        assert trend.shape == TrendShape.MONOTONIC_DECREASE

    def test_every_pair_has_recommendations(self):
        for category in (SymptomCategory.HOT_FLASHES, SymptomCategory.SLEEP_QUALITY):
            for direction in TrendDirection:
                assert TREND_RECOMMENDATIONS[(category, direction)]


def test_perfect_fortnight_is_stable(make_records):
    records = make_records(14, hot_flashes=0, sleep=5, mood=5, energy=5)
    assert [t.direction for t in compute_trends(records)] == [TrendDirection.STABLE] * 2


def test_flat_week_counts_as_non_decreasing(make_records):
    assert classify_shape([2] * 7) == TrendShape.MONOTONIC_INCREASE
    records = make_records(14, hot_flashes=0, sleep=5, mood=5, energy=5)
    assert [t.shape for t in compute_trends(records)] == [TrendShape.MONOTONIC_INCREASE] * 2
