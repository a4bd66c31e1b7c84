"""
Trend statistics over the monthly revenue history.

The `mean_*` helpers return None when there is nothing to average; the
public estimators substitute the documented defaults explicitly.
"""
from typing import Optional, Sequence

import numpy as np

from revenue_forecast.models import HistoricalPoint

DEFAULT_AVERAGE_REVENUE = 1000.0
DEFAULT_GROWTH_RATE = 0.05
MIN_GROWTH_RATE = -0.15
MAX_GROWTH_RATE = 0.25

# Number of most recent points used for month-over-month growth
GROWTH_WINDOW = 6


def mean_revenue(points: Sequence[HistoricalPoint]) -> Optional[float]:
    """Arithmetic mean of revenue, or None for an empty sequence."""
    if not points:
        return None
    return float(np.mean([p.revenue for p in points]))


def mean_growth(history: Sequence[HistoricalPoint]) -> Optional[float]:
    """Average month-over-month growth over the last GROWTH_WINDOW points.

    Pairs whose earlier revenue is not positive, or whose delta overflows,
    are skipped. Returns None when no pair qualifies.
    """
    if len(history) < 2:
        return None

    revenues = np.array([p.revenue for p in history[-GROWTH_WINDOW:]], dtype=float)
    prev, curr = revenues[:-1], revenues[1:]
    mask = prev > 0
    if not mask.any():
        return None

    with np.errstate(over="ignore"):
        deltas = (curr[mask] - prev[mask]) / prev[mask]
        deltas = deltas[np.isfinite(deltas)]
        if deltas.size == 0:
            return None
        return float(np.mean(deltas))


def calculate_growth_rate(history: Sequence[HistoricalPoint]) -> float:
    """Month-over-month growth rate clamped to [-0.15, 0.25]; 0.05 without data."""
    growth = mean_growth(history)
    if growth is None:
        growth = DEFAULT_GROWTH_RATE
    return float(np.clip(growth, MIN_GROWTH_RATE, MAX_GROWTH_RATE))


def get_average_revenue(history: Sequence[HistoricalPoint]) -> float:
    average = mean_revenue(history)
    if average is None:
        return DEFAULT_AVERAGE_REVENUE
    return average


def get_prediction_from_historical(
    history: Sequence[HistoricalPoint],
    target_month_index: int,
) -> float:
    """Mean revenue of past occurrences of the target month.

    Falls back to the overall average when the month never appears.
    """
    same_month = [p for p in history if p.month_index == target_month_index]
    average = mean_revenue(same_month)
    if average is None:
        return get_average_revenue(history)
    return average
