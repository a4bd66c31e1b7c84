"""
Tests for revenue_forecast.trend module.
"""
import pytest

from revenue_forecast.models import HistoricalPoint
from revenue_forecast.trend import (
    DEFAULT_AVERAGE_REVENUE,
    DEFAULT_GROWTH_RATE,
    calculate_growth_rate,
    get_average_revenue,
    get_prediction_from_historical,
    mean_growth,
    mean_revenue,
)


def _series(*revenues, start_year=2023):
    """Consecutive months starting January of start_year."""
    points = []
    for i, revenue in enumerate(revenues):
        year = start_year + i // 12
        points.append(HistoricalPoint(f"{year}-{i % 12 + 1:02d}", revenue=float(revenue)))
    return points


class TestMeanRevenue:
    def test_empty_is_no_data(self):
        assert mean_revenue([]) is None

    def test_mean(self):
        assert mean_revenue(_series(100, 200, 600)) == pytest.approx(300.0)


class TestAverageRevenue:
    def test_empty_returns_default(self):
        assert get_average_revenue([]) == DEFAULT_AVERAGE_REVENUE == 1000

    def test_mean_of_all_points(self):
        assert get_average_revenue(_series(100, 300)) == pytest.approx(200.0)


class TestGrowthRate:
    """Tests for calculate_growth_rate."""

    def test_empty_history(self):
        assert calculate_growth_rate([]) == DEFAULT_GROWTH_RATE == 0.05

    def test_single_point(self):
        assert calculate_growth_rate(_series(500)) == 0.05

    def test_all_zero_revenue_defaults(self):
        assert mean_growth(_series(0, 0, 0)) is None
        assert calculate_growth_rate(_series(0, 0, 0)) == 0.05

    def test_skips_pairs_with_zero_previous(self):
        """0 -> 100 is skipped; only 100 -> 110 counts."""
        assert calculate_growth_rate(_series(0, 100, 110)) == pytest.approx(0.1)

    def test_linear_growth(self, linear_history):
        expected = sum(100 / r for r in (1000, 1100, 1200, 1300, 1400)) / 5
        rate = calculate_growth_rate(linear_history)
        assert rate == pytest.approx(expected)
        assert 0.08 <= rate <= 0.10

    def test_clamped_high(self):
        assert calculate_growth_rate(_series(100, 1000)) == 0.25

    def test_clamped_low(self):
        assert calculate_growth_rate(_series(1000, 100)) == -0.15

    def test_uses_last_six_points(self):
        """Earlier volatility is ignored once six flat months follow."""
        history = _series(10, 5000, 1, 9000, 500, 500, 500, 500, 500, 500)
        assert calculate_growth_rate(history) == pytest.approx(0.0)

    @pytest.mark.parametrize("revenues", [
        (1, 10_000_000),
        (10_000_000, 1),
        (5, 0, 5, 0, 5),
        (100, -50, 300),
        (1e-9, 1e9, 1e-9),
        (1e-320, 1e300, 1e-320, -1e300),
    ])
    def test_always_within_bounds(self, revenues):
        rate = calculate_growth_rate(_series(*revenues))
        assert -0.15 <= rate <= 0.25

    def test_overflowing_deltas_skipped(self):
        """1e-320 -> 1e300 overflows to inf and is dropped; 1e300 -> 1e-320 is -1."""
        history = _series(1e-320, 1e300, 1e-320, -1e300)
        assert mean_growth(history) == pytest.approx(-1.0)
        assert calculate_growth_rate(history) == -0.15

    def test_only_overflowing_deltas_defaults(self):
        assert mean_growth(_series(1e-320, 1e300)) is None
        assert calculate_growth_rate(_series(1e-320, 1e300)) == 0.05


class TestPredictionFromHistorical:
    def test_averages_matching_month(self):
        history = [
            HistoricalPoint("2023-07", 500.0),
            HistoricalPoint("2024-01", 100.0),
            HistoricalPoint("2024-07", 700.0),
        ]
        assert get_prediction_from_historical(history, 6) == pytest.approx(600.0)

    def test_no_match_uses_overall_average(self):
        history = [
            HistoricalPoint("2023-07", 500.0),
            HistoricalPoint("2024-01", 100.0),
            HistoricalPoint("2024-07", 700.0),
        ]
        assert get_prediction_from_historical(history, 2) == pytest.approx(1300.0 / 3)

    def test_empty_history_uses_default(self):
        assert get_prediction_from_historical([], 4) == 1000.0
