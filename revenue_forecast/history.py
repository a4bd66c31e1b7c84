"""
Monthly revenue history built from raw order records.

Orders arrive as documents with an epoch-millisecond (or ISO string) `date`
and a numeric `amount`. They are bucketed per calendar month in UTC, which
is the series the forecast engine consumes.
"""
import logging
import numbers
from datetime import date
from typing import Optional, Dict, Any, Iterable, List

import pandas as pd

from revenue_forecast.config import config
from revenue_forecast.engine import ForecastEngine
from revenue_forecast.exceptions import ValidationError
from revenue_forecast.models import HistoricalPoint
from revenue_forecast.schemas import RevenueForecastResponse

logger = logging.getLogger(__name__)


def _to_timestamp(value: Any) -> pd.Timestamp:
    """Parse an order date (epoch ms, ISO string or datetime) as UTC."""
    if value is None or isinstance(value, bool):
        return pd.NaT

    try:
        if isinstance(value, numbers.Real):
            if pd.isna(value):
                return pd.NaT
            return pd.Timestamp(int(value), unit="ms", tz="UTC")
        ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError):
        return pd.NaT

    if pd.isna(ts):
        return pd.NaT
    return ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")


def aggregate_monthly_history(
    orders: Iterable[Dict[str, Any]],
    today: Optional[date] = None,
    months_back: Optional[int] = None,
) -> List[HistoricalPoint]:
    """Sum order amounts per "YYYY-MM" month over the last `months_back` months.

    Orders with an unparseable date or amount are dropped, as are months
    whose totals fail validation (e.g. an infinite amount). Output is sorted
    ascending by period.
    """
    today = today or date.today()
    if months_back is None:
        months_back = config.history.months_back

    df = pd.DataFrame(list(orders))
    if df.empty:
        return []

    if "date" not in df.columns or "amount" not in df.columns:
        logger.warning(f"Orders are missing date/amount fields; got columns {list(df.columns)}")
        return []

    df["ts"] = pd.to_datetime(df["date"].map(_to_timestamp), utc=True)
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")

    invalid = df["ts"].isna() | df["amount"].isna()
    if invalid.any():
        logger.warning(f"Skipping {int(invalid.sum())} orders with invalid date or amount")
        df = df[~invalid]
        if df.empty:
            return []

    window_end = pd.Timestamp(today.isoformat(), tz="UTC") + pd.Timedelta(days=1)
    window_start = pd.Timestamp(today.isoformat(), tz="UTC") - pd.DateOffset(months=months_back)
    df = df[(df["ts"] >= window_start) & (df["ts"] < window_end)]
    if df.empty:
        return []

    df = df.assign(period=df["ts"].dt.strftime("%Y-%m"))
    monthly = (
        df.groupby("period")
        .agg(revenue=("amount", "sum"), orders=("amount", "size"))
        .reset_index()
        .sort_values("period")
    )

    history: List[HistoricalPoint] = []
    for row in monthly.itertuples(index=False):
        try:
            history.append(HistoricalPoint.from_dict(
                {"_id": row.period, "revenue": float(row.revenue), "orders": int(row.orders)}
            ))
        except ValidationError as e:
            logger.warning(f"Skipping month {row.period}: {e}")
    return history


def build_revenue_forecast(
    engine: ForecastEngine,
    orders: Iterable[Dict[str, Any]],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Dashboard payload: monthly history plus the 3-month forecast.

    Bad order data yields an empty history rather than an error, so the
    payload is always well-formed.
    """
    today = today or date.today()
    try:
        history = aggregate_monthly_history(orders, today=today)
    except Exception as e:
        logger.error(f"Failed to aggregate order history: {e}", exc_info=True)
        history = []

    result = engine.get_revenue_predictions(history, today=today)

    response = RevenueForecastResponse(
        historicalData=[point.to_dict() for point in history],
        predictions=[p.to_dict() for p in result.predictions],
        growthRate=result.growth_rate,
    )
    return response.model_dump(by_alias=True)
