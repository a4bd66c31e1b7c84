"""
Revenue forecasting engine.

Blends an optional precomputed statistical forecast with historical monthly
averages, compounds the recent growth trend and applies the calendar
seasonal model to forecast revenue for the next three months.

Forecasts feed a non-critical dashboard widget, so `get_revenue_predictions`
never raises: on failure it degrades to the average-only fallback, and if
that fails too it returns an empty result.
"""
import logging
import math
import threading
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional, List, Sequence, Tuple

from revenue_forecast.artifacts import load_model_components, load_precomputed_forecast
from revenue_forecast.config import ArtifactConfig, config
from revenue_forecast.exceptions import ForecastComputationError
from revenue_forecast.models import (
    ForecastResult,
    HistoricalPoint,
    ModelComponents,
    Prediction,
    PrecomputedForecastRow,
)
from revenue_forecast.observability import Timer, timed
from revenue_forecast.seasonality import get_seasonal_factor, month_name
from revenue_forecast.trend import (
    calculate_growth_rate,
    get_average_revenue,
    get_prediction_from_historical,
)

logger = logging.getLogger(__name__)

# How many months ahead to forecast
FORECAST_HORIZON_MONTHS = 3

MIN_PREDICTED_REVENUE = 10.0
MIN_CONFIDENCE = 40.0
MAX_CONFIDENCE = 100.0

# Blended path: 85 - 5*i, minus the penalty when no precomputed value exists
BLEND_BASE_CONFIDENCE = 85.0
BLEND_CONFIDENCE_STEP = 5.0
HISTORICAL_SOURCE_PENALTY = 10.0

# Fallback path: 80 - 10*i
FALLBACK_BASE_CONFIDENCE = 80.0
FALLBACK_CONFIDENCE_STEP = 10.0


def _target_period(today: date, horizon: int) -> Tuple[int, int]:
    """(0-based month, year) `horizon` months after today's month."""
    offset = today.month - 1 + horizon
    return offset % 12, today.year + offset // 12


def _clamp_confidence(value: float) -> float:
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))


class ForecastEngine:
    """Revenue forecasting over monthly history with optional precomputed artifacts."""

    def __init__(
        self,
        artifact_dir: Optional[Path] = None,
        components_file: Optional[str] = None,
        precomputed_file: Optional[str] = None,
    ):
        overrides = {
            "directory": Path(artifact_dir) if artifact_dir is not None else None,
            "components_file": components_file,
            "precomputed_file": precomputed_file,
        }
        self.artifacts: ArtifactConfig = replace(
            config.artifacts, **{k: v for k, v in overrides.items() if v is not None}
        )
        self.components_path = self.artifacts.components_path
        self.precomputed_path = self.artifacts.precomputed_path

        self._model_components: Optional[ModelComponents] = None
        self._precomputed_forecast: Optional[List[PrecomputedForecastRow]] = None
        self._init_lock = threading.Lock()

    @property
    def model_components(self) -> Optional[ModelComponents]:
        return self._model_components

    @property
    def precomputed_forecast(self) -> Optional[List[PrecomputedForecastRow]]:
        return self._precomputed_forecast

    @property
    def is_ready(self) -> bool:
        """True once any artifact has been loaded."""
        return self._model_components is not None or self._precomputed_forecast is not None

    @property
    def has_precomputed_forecast(self) -> bool:
        return self._precomputed_forecast is not None

    # ─── Initialization ──────────────────────────────────────────────────────

    def initialize(self) -> bool:
        """Load the optional artifacts, replacing anything loaded before.

        Missing files are expected and only logged. Returns False when a
        present file could not be loaded; the engine keeps working on
        defaults in that case.
        """
        with self._init_lock, Timer("forecast_engine.initialize", logger):
            self._model_components = None
            self._precomputed_forecast = None
            try:
                if self.components_path.exists():
                    self._model_components = load_model_components(self.components_path)
                else:
                    logger.warning(f"Model components not found at {self.components_path}")

                if self.precomputed_path.exists():
                    self._precomputed_forecast = load_precomputed_forecast(self.precomputed_path)
                else:
                    logger.warning(f"Pre-computed forecast not found at {self.precomputed_path}")

                return True
            except Exception as e:
                logger.error(f"Error initializing forecast engine: {e}", exc_info=True)
                return False

    # ─── Primitives ──────────────────────────────────────────────────────────

    def get_seasonal_factor(self, month_index: int, year: int) -> float:
        return get_seasonal_factor(month_index, year, components=self._model_components)

    def calculate_growth_rate(self, history: Sequence[HistoricalPoint]) -> float:
        return calculate_growth_rate(history)

    def get_average_revenue(self, history: Sequence[HistoricalPoint]) -> float:
        return get_average_revenue(history)

    def get_prediction_from_historical(
        self, history: Sequence[HistoricalPoint], target_month_index: int
    ) -> float:
        return get_prediction_from_historical(history, target_month_index)

    def _precomputed_base(self, month_index: int, year: int) -> Optional[float]:
        """Mean precomputed value for the month, or None if there is none."""
        if not self._precomputed_forecast:
            return None
        matching = [
            row for row in self._precomputed_forecast
            if row.month_index == month_index and row.year == year
        ]
        if not matching:
            return None
        return sum(row.yhat for row in matching) / len(matching)

    # ─── Forecasts ───────────────────────────────────────────────────────────

    @timed("forecast_engine.get_revenue_predictions")
    def get_revenue_predictions(
        self,
        history: Sequence[HistoricalPoint],
        today: Optional[date] = None,
    ) -> ForecastResult:
        """Forecast revenue for the next FORECAST_HORIZON_MONTHS months.

        Never raises; see module docstring for the degradation order.
        """
        today = today or date.today()
        try:
            return self._blend_predictions(history, today)
        except Exception as e:
            logger.error(f"Error generating revenue predictions: {e}", exc_info=True)
            return self.get_fallback_predictions(history, today)

    def _blend_predictions(
        self, history: Sequence[HistoricalPoint], today: date
    ) -> ForecastResult:
        growth_rate = self.calculate_growth_rate(history)
        predictions: List[Prediction] = []
        previous_confidence = MAX_CONFIDENCE

        for i in range(1, FORECAST_HORIZON_MONTHS + 1):
            target_month, target_year = _target_period(today, i)
            confidence = BLEND_BASE_CONFIDENCE - BLEND_CONFIDENCE_STEP * i

            base = self._precomputed_base(target_month, target_year)
            if base is None:
                base = self.get_prediction_from_historical(history, target_month)
                confidence -= HISTORICAL_SOURCE_PENALTY

            growth_adjusted = base * (1 + growth_rate) ** i
            final = growth_adjusted * self.get_seasonal_factor(target_month, target_year)
            if not math.isfinite(final):
                raise ForecastComputationError(
                    "Non-finite revenue forecast", f"{target_year}-{target_month + 1:02d}", horizon=i
                )

            # a later horizon never reports more confidence than an earlier one
            confidence = min(_clamp_confidence(confidence), previous_confidence)
            previous_confidence = confidence

            predictions.append(Prediction(
                month_name=month_name(target_month),
                year=target_year,
                revenue=max(MIN_PREDICTED_REVENUE, final),
                confidence=confidence,
            ))

        return ForecastResult(predictions=predictions, growth_rate=growth_rate)

    def get_fallback_predictions(
        self,
        history: Sequence[HistoricalPoint],
        today: Optional[date] = None,
    ) -> ForecastResult:
        """Average-plus-growth forecast without per-month lookups.

        Returns an empty result with zero growth if even this fails.
        """
        today = today or date.today()
        try:
            average = self.get_average_revenue(history)
            growth_rate = self.calculate_growth_rate(history)
            predictions: List[Prediction] = []

            for i in range(1, FORECAST_HORIZON_MONTHS + 1):
                target_month, target_year = _target_period(today, i)
                prediction = average * (1 + growth_rate) ** i
                prediction *= self.get_seasonal_factor(target_month, target_year)
                if not math.isfinite(prediction):
                    raise ForecastComputationError(
                        "Non-finite fallback forecast", f"{target_year}-{target_month + 1:02d}", horizon=i
                    )

                predictions.append(Prediction(
                    month_name=month_name(target_month),
                    year=target_year,
                    revenue=max(MIN_PREDICTED_REVENUE, prediction),
                    confidence=_clamp_confidence(
                        FALLBACK_BASE_CONFIDENCE - FALLBACK_CONFIDENCE_STEP * i
                    ),
                ))

            return ForecastResult(predictions=predictions, growth_rate=growth_rate)
        except Exception as e:
            logger.error(f"Error in fallback predictions: {e}", exc_info=True)
            return ForecastResult.empty()
