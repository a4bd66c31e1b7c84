#!/usr/bin/env python3
"""
Print the revenue forecast payload for an exported order list.

Usage:
    python scripts/forecast_revenue.py orders.json
    python scripts/forecast_revenue.py orders.json --today 2024-06-15 --artifact-dir data/ml
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from revenue_forecast.config import config, validate_config, ConfigurationError
from revenue_forecast.engine import ForecastEngine
from revenue_forecast.exceptions import ValidationError
from revenue_forecast.history import build_revenue_forecast
from revenue_forecast.observability import setup_logging
from revenue_forecast.validators import validate_iso_date

logger = logging.getLogger(__name__)


def main(orders_file: Path, today=None, artifact_dir=None) -> int:
    try:
        with open(orders_file, encoding="utf-8") as f:
            orders = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read orders from {orders_file}: {e}")
        return 1

    if not isinstance(orders, list):
        logger.error(f"Expected a JSON array of orders in {orders_file}")
        return 1

    engine = ForecastEngine(artifact_dir=artifact_dir)
    if not engine.initialize():
        logger.warning("Artifacts failed to load, forecasting from order history only")

    payload = build_revenue_forecast(engine, orders, today=today)
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Forecast revenue for the next 3 months")
    parser.add_argument("orders", type=Path, help="JSON file with order documents (date, amount)")
    parser.add_argument("--today", help="Reference date (YYYY-MM-DD, default: today)")
    parser.add_argument("--artifact-dir", type=Path, help="Directory with forecast artifacts")
    args = parser.parse_args()

    setup_logging(config.logging.level, config.logging.json_format)
    try:
        validate_config()
        today = validate_iso_date(args.today, "today") if args.today else None
    except (ConfigurationError, ValidationError) as e:
        logger.error(str(e))
        sys.exit(2)

    sys.exit(main(args.orders, today=today, artifact_dir=args.artifact_dir))
