"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, List, Any

from revenue_forecast.engine import ForecastEngine
from revenue_forecast.models import HistoricalPoint


def epoch_ms(year: int, month: int, day: int) -> int:
    """Order timestamp as stored by the shop backend (UTC epoch milliseconds)."""
    return int(datetime(year, month, day, 12, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def linear_history() -> List[HistoricalPoint]:
    """Jan-Jun 2024, revenue growing by 100 per month."""
    return [
        HistoricalPoint(f"2024-{m:02d}", revenue=900.0 + 100 * m, order_count=9 + m)
        for m in range(1, 7)
    ]


@pytest.fixture
def june_2024() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def artifact_dir(tmp_path) -> Path:
    path = tmp_path / "ml"
    path.mkdir()
    return path


@pytest.fixture
def engine(artifact_dir) -> ForecastEngine:
    """Engine pointed at an empty artifact directory (not initialized)."""
    return ForecastEngine(artifact_dir=artifact_dir)


@pytest.fixture
def write_forecast_csv(artifact_dir):
    """Write next_3_months_forecast.csv into the artifact directory."""
    def _write(content: str) -> Path:
        path = artifact_dir / "next_3_months_forecast.csv"
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_components(artifact_dir):
    """Write model_components.json into the artifact directory."""
    def _write(content: str) -> Path:
        path = artifact_dir / "model_components.json"
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_orders() -> List[Dict[str, Any]]:
    """Order documents as returned by the order collection."""
    return [
        {"_id": "o1", "date": epoch_ms(2024, 1, 5), "amount": 100.0, "status": "Delivered"},
        {"_id": "o2", "date": epoch_ms(2024, 1, 20), "amount": 50.0, "status": "Order Placed"},
        {"_id": "o3", "date": "2024-02-10T12:00:00Z", "amount": 200.0, "status": "Shipped"},
        {"_id": "o4", "date": epoch_ms(2024, 3, 1), "amount": "300", "status": "Delivered"},
        # Outside the 36-month window
        {"_id": "o5", "date": epoch_ms(2020, 1, 1), "amount": 999.0, "status": "Delivered"},
        # After "today"
        {"_id": "o6", "date": epoch_ms(2024, 8, 1), "amount": 999.0, "status": "Order Placed"},
        # Invalid records (skipped)
        {"_id": "o7", "date": epoch_ms(2024, 3, 2), "amount": "abc", "status": "Delivered"},
        {"_id": "o8", "date": "not a date", "amount": 10.0, "status": "Delivered"},
    ]
