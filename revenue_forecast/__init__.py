"""
Revenue forecasting engine for the shop admin dashboard.

This package contains:
- engine: ForecastEngine (artifact loading, blended and fallback forecasts)
- seasonality: holiday / school vacation seasonal model
- trend: growth rate and average revenue statistics
- history: monthly aggregation of order records
- exceptions: Custom exception hierarchy
- config: Centralized configuration
"""

# Import in dependency order
from revenue_forecast.exceptions import (
    ForecastError,
    ArtifactError,
    ArtifactLoadError,
    ArtifactFormatError,
    ForecastComputationError,
    ValidationError,
)

from revenue_forecast.models import (
    HistoricalPoint,
    PrecomputedForecastRow,
    ModelComponents,
    HolidayRule,
    VacationRule,
    Prediction,
    ForecastResult,
)

from revenue_forecast.seasonality import get_seasonal_factor, month_name

from revenue_forecast.trend import (
    calculate_growth_rate,
    get_average_revenue,
    get_prediction_from_historical,
)

from revenue_forecast.engine import ForecastEngine

from revenue_forecast.history import aggregate_monthly_history, build_revenue_forecast

from revenue_forecast.config import config

__all__ = [
    # Exceptions
    "ForecastError",
    "ArtifactError",
    "ArtifactLoadError",
    "ArtifactFormatError",
    "ForecastComputationError",
    "ValidationError",
    # Models
    "HistoricalPoint",
    "PrecomputedForecastRow",
    "ModelComponents",
    "HolidayRule",
    "VacationRule",
    "Prediction",
    "ForecastResult",
    # Forecasting
    "get_seasonal_factor",
    "month_name",
    "calculate_growth_rate",
    "get_average_revenue",
    "get_prediction_from_historical",
    "ForecastEngine",
    "aggregate_monthly_history",
    "build_revenue_forecast",
    # Config
    "config",
]
