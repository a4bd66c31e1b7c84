"""
Input validation functions for forecast inputs and artifact rows.

All validators raise ValidationError on invalid input.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Tuple

from revenue_forecast.exceptions import ValidationError


PERIOD_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

MIN_YEAR = 1970
MAX_YEAR = 9999


def validate_period_key(value: str, field: str = "period_key") -> Tuple[int, int]:
    """
    Validate a "YYYY-MM" period key.

    Args:
        value: Period key to validate
        field: Field name for error messages

    Returns:
        Tuple of (year, month) with month 1-based

    Raises:
        ValidationError: If the key is missing or malformed
    """
    if not value:
        raise ValidationError(field, "Period key is required", value)

    if not isinstance(value, str):
        raise ValidationError(field, "Must be a string", value)

    match = PERIOD_KEY_PATTERN.match(value.strip())
    if not match:
        raise ValidationError(field, "Invalid period format. Expected YYYY-MM", value)

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(field, "Month must be between 01 and 12", value)

    return validate_year(year, field), month


def validate_month_index(value: int, field: str = "month_index") -> int:
    """
    Validate a 0-based month index (0 = January, 11 = December).

    Raises:
        ValidationError: If not an integer in 0..11
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "Must be an integer", value)

    if not 0 <= value <= 11:
        raise ValidationError(field, "Must be between 0 and 11", value)

    return value


def validate_year(value: int, field: str = "year") -> int:
    """Validate a calendar year."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "Must be an integer", value)

    if not MIN_YEAR <= value <= MAX_YEAR:
        raise ValidationError(field, f"Must be between {MIN_YEAR} and {MAX_YEAR}", value)

    return value


def validate_number(value: Any, field: str, allow_negative: bool = True) -> float:
    """
    Validate and coerce a finite number.

    Numeric strings are accepted (artifact rows arrive as text).

    Raises:
        ValidationError: If value is missing, non-numeric, NaN or infinite
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(field, "Must be a number", value)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError(field, "Must be a number", value)

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, "Must be a number", value)

    if not math.isfinite(number):
        raise ValidationError(field, "Must be finite", value)

    if not allow_negative and number < 0:
        raise ValidationError(field, "Cannot be negative", value)

    return number


def validate_order_count(value: Any, field: str = "order_count") -> int:
    """Validate a non-negative integer order count."""
    if isinstance(value, bool):
        raise ValidationError(field, "Must be an integer", value)

    if isinstance(value, float) and value.is_integer():
        value = int(value)

    if not isinstance(value, int):
        raise ValidationError(field, "Must be an integer", value)

    if value < 0:
        raise ValidationError(field, "Cannot be negative", value)

    return value


def validate_iso_date(value: Any, field: str = "ds") -> date:
    """
    Validate and parse an ISO date or datetime string.

    Only the calendar date is kept; "2024-07-01" and "2024-07-01 00:00:00"
    both parse to date(2024, 7, 1).

    Raises:
        ValidationError: If the value is not a parseable ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not value or not isinstance(value, str):
        raise ValidationError(field, "Date is required", value)

    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        raise ValidationError(field, "Invalid date format. Expected ISO 8601", value)
