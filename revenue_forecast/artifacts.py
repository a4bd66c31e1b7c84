"""
Loaders for the optional forecast artifacts.

- model_components.json: {"seasonal_indices": {"monthly": {"0": 1.02, ...}}}
- next_3_months_forecast.csv: forecast table with at least `ds` and `yhat`
  columns (extra columns such as yhat_lower/yhat_upper are ignored)

Both loaders raise ArtifactError subclasses for files that exist but are
unusable. Checking whether a file exists is the caller's job.
"""
import json
import logging
from pathlib import Path
from typing import List

import pandas as pd

from revenue_forecast.exceptions import ArtifactFormatError, ArtifactLoadError, ValidationError
from revenue_forecast.models import ModelComponents, PrecomputedForecastRow, parse_seasonal_indices

logger = logging.getLogger(__name__)

REQUIRED_FORECAST_COLUMNS = ("ds", "yhat")


def load_model_components(path: Path) -> ModelComponents:
    """Load seasonal indices from the model components JSON file.

    A file without `seasonal_indices.monthly` yields neutral components.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactLoadError("Failed to read model components", str(e), path=str(path))

    if not isinstance(raw, dict):
        raise ArtifactFormatError(
            "Model components must be a JSON object",
            type(raw).__name__,
            path=str(path),
            expected="object",
        )

    seasonal = raw.get("seasonal_indices") or {}
    monthly = seasonal.get("monthly") if isinstance(seasonal, dict) else None
    if monthly is not None and not isinstance(monthly, (dict, list)):
        raise ArtifactFormatError(
            "seasonal_indices.monthly must be a mapping",
            type(monthly).__name__,
            path=str(path),
            expected="object or array",
        )

    try:
        indices = parse_seasonal_indices(monthly)
    except ValidationError as e:
        raise ArtifactFormatError("Invalid seasonal index", str(e), path=str(path))

    logger.info(f"Model components loaded from {path}: {len(indices)} monthly indices")
    return ModelComponents(seasonal_indices_by_month=indices)


def load_precomputed_forecast(path: Path) -> List[PrecomputedForecastRow]:
    """Load the precomputed forecast table.

    Rows with the wrong number of columns or unparseable `ds`/`yhat` cells
    are skipped with a warning; the remaining rows are kept.
    """
    skipped = 0

    def _on_bad_line(fields: List[str]) -> None:
        nonlocal skipped
        skipped += 1
        logger.warning(f"Skipping forecast row with too many columns in {path}: {fields}")
        return None

    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            engine="python",
            on_bad_lines=_on_bad_line,
        )
    except pd.errors.EmptyDataError as e:
        raise ArtifactLoadError("Forecast table is empty", str(e), path=str(path))
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise ArtifactLoadError("Failed to read forecast table", str(e), path=str(path))

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_FORECAST_COLUMNS if c not in df.columns]
    if missing:
        raise ArtifactFormatError(
            "Forecast table is missing required columns",
            ", ".join(missing),
            path=str(path),
            expected=", ".join(REQUIRED_FORECAST_COLUMNS),
        )

    rows: List[PrecomputedForecastRow] = []
    for line_no, row in enumerate(df.itertuples(index=False, name=None), start=1):
        # short rows are padded with NaN instead of strings
        if any(not isinstance(cell, str) for cell in row):
            skipped += 1
            logger.warning(f"Skipping forecast data row {line_no} in {path}: expected {len(df.columns)} columns")
            continue
        record = dict(zip(df.columns, row))
        try:
            rows.append(PrecomputedForecastRow.parse(record["ds"], record["yhat"]))
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping forecast data row {line_no} in {path}: {e}")

    logger.info(f"Precomputed forecast loaded from {path}: {len(rows)} rows, {skipped} skipped")
    return rows
