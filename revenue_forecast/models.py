"""
Domain models for the revenue forecasting engine.

Provides type-safe dataclasses for historical points, precomputed forecast
rows, seasonal rules and predictions. The HTTP layer serializes the
`to_dict()` output of these models directly.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, List, Dict, Any

from revenue_forecast.validators import (
    validate_period_key,
    validate_number,
    validate_order_count,
    validate_iso_date,
    validate_month_index,
)


# ═══════════════════════════════════════════════════════════════════════════════
# INPUTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HistoricalPoint:
    """Revenue and order count for one calendar month."""
    period_key: str
    revenue: float
    order_count: int = 0

    @property
    def year(self) -> int:
        return int(self.period_key[:4])

    @property
    def month_index(self) -> int:
        """0-based month (0 = January)."""
        return int(self.period_key[5:7]) - 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoricalPoint":
        """Create HistoricalPoint from a monthly aggregation document.

        Accepts both the aggregation shape ({"_id": "2024-03", "revenue", "orders"})
        and the camelCase shape ({"periodKey", "revenue", "orderCount"}).

        Raises:
            ValidationError: If the period key, revenue or count is invalid
        """
        period_key = data.get("periodKey", data.get("_id"))
        year, month = validate_period_key(period_key, "periodKey")
        revenue = validate_number(data.get("revenue"), "revenue")
        order_count = validate_order_count(
            data.get("orderCount", data.get("orders", 0)), "orderCount"
        )
        return cls(
            period_key=f"{year:04d}-{month:02d}",
            revenue=revenue,
            order_count=order_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.period_key,
            "revenue": self.revenue,
            "orders": self.order_count,
        }


@dataclass(frozen=True)
class PrecomputedForecastRow:
    """One row of the externally generated forecast table."""
    ds: date
    yhat: float

    @property
    def year(self) -> int:
        return self.ds.year

    @property
    def month_index(self) -> int:
        return self.ds.month - 1

    @classmethod
    def parse(cls, ds: Any, yhat: Any) -> "PrecomputedForecastRow":
        """Build a row from raw CSV cell values.

        Raises:
            ValidationError: If the date or value cannot be parsed
        """
        return cls(
            ds=validate_iso_date(ds, "ds"),
            yhat=validate_number(yhat, "yhat"),
        )


@dataclass(frozen=True)
class ModelComponents:
    """Seasonal indices shipped alongside the precomputed forecast."""
    seasonal_indices_by_month: Dict[int, float] = field(default_factory=dict)

    def seasonal_index(self, month_index: int) -> float:
        """Base seasonal index for a 0-based month, 1.0 when not provided."""
        return self.seasonal_indices_by_month.get(month_index, 1.0)


# ═══════════════════════════════════════════════════════════════════════════════
# SEASONAL RULES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HolidayRule:
    """Public holiday with a revenue multiplier for its month."""
    name: str
    month: int  # 1-based
    day: int
    impact_factor: float


@dataclass(frozen=True)
class VacationRule:
    """School vacation window; may wrap around the year end."""
    start_month: int  # 1-based
    start_day: int
    end_month: int
    end_day: int
    impact_factor: float

    @property
    def wraps_year(self) -> bool:
        return self.start_month > self.end_month

    def covers_month(self, month: int) -> bool:
        """Whether the 1-based month falls inside the window (inclusive)."""
        if self.wraps_year:
            return month >= self.start_month or month <= self.end_month
        return self.start_month <= month <= self.end_month


# ═══════════════════════════════════════════════════════════════════════════════
# OUTPUTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class Prediction:
    """Forecast for a single month."""
    month_name: str
    year: int
    revenue: float
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month_name,
            "year": self.year,
            "revenue": self.revenue,
            "confidence": self.confidence,
        }


@dataclass
class ForecastResult:
    """Predictions for the forecast horizon plus the shared growth rate."""
    predictions: List[Prediction] = field(default_factory=list)
    growth_rate: float = 0.0

    @classmethod
    def empty(cls) -> "ForecastResult":
        return cls(predictions=[], growth_rate=0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictions": [p.to_dict() for p in self.predictions],
            "growthRate": self.growth_rate,
        }


def parse_seasonal_indices(raw: Optional[Dict[Any, Any]]) -> Dict[int, float]:
    """Convert a JSON month -> multiplier mapping into {month_index: float}.

    JSON object keys are strings ("0".."11"); a list of 12 numbers is also
    accepted.

    Raises:
        ValidationError: If a key is not a month index or a value is not a
            positive number
    """
    if raw is None:
        return {}

    if isinstance(raw, list):
        raw = dict(enumerate(raw))

    indices: Dict[int, float] = {}
    for key, value in raw.items():
        try:
            month_index = int(key)
        except (TypeError, ValueError):
            month_index = key
        month_index = validate_month_index(month_index, "seasonal_indices.monthly")
        number = validate_number(value, f"seasonal_indices.monthly[{month_index}]", allow_negative=False)
        if number == 0:
            # zero falls back to the neutral 1.0 index
            continue
        indices[month_index] = number
    return indices
