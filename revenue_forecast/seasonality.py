"""
Calendar-driven seasonal model for Sri Lankan retail revenue.

A month's factor is the model's base seasonal index multiplied by the impact
of every public holiday and school vacation falling in that month, then by
the fixed Avurudu (April) and year-end (December) peak boosts.
"""
from typing import Optional, Sequence

from revenue_forecast.models import HolidayRule, ModelComponents, VacationRule
from revenue_forecast.validators import validate_month_index

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

HOLIDAYS: Sequence[HolidayRule] = (
    HolidayRule("New Year's Day", month=1, day=1, impact_factor=0.8),
    HolidayRule("Independence Day", month=2, day=4, impact_factor=1.2),
    HolidayRule("Sinhala & Tamil New Year", month=4, day=13, impact_factor=1.8),
    HolidayRule("May Day", month=5, day=1, impact_factor=1.0),
    HolidayRule("Vesak Full Moon", month=5, day=7, impact_factor=0.7),
    HolidayRule("Christmas", month=12, day=25, impact_factor=1.6),
)

SCHOOL_VACATIONS: Sequence[VacationRule] = (
    VacationRule(start_month=4, start_day=5, end_month=4, end_day=20, impact_factor=1.3),
    VacationRule(start_month=8, start_day=1, end_month=8, end_day=20, impact_factor=1.2),
    VacationRule(start_month=12, start_day=10, end_month=1, end_day=10, impact_factor=1.5),
)

# Fixed peak-season boosts keyed by 0-based month. These apply on top of the
# holiday entries for the same months.
PEAK_SEASON_BOOSTS = {
    3: 1.5,   # April (Avurudu season)
    11: 1.8,  # December (Christmas / year-end)
}


def month_name(month_index: int) -> str:
    """English name for a 0-based month index."""
    return MONTH_NAMES[validate_month_index(month_index)]


def get_seasonal_factor(
    month_index: int,
    year: int,
    components: Optional[ModelComponents] = None,
    holidays: Sequence[HolidayRule] = HOLIDAYS,
    vacations: Sequence[VacationRule] = SCHOOL_VACATIONS,
) -> float:
    """Multiplicative seasonal adjustment for a month.

    `year` is accepted for calendars with moving holidays; the current
    tables are fixed-date so every year gets the same factor.
    """
    month_index = validate_month_index(month_index)
    month = month_index + 1

    factor = components.seasonal_index(month_index) if components else 1.0

    for holiday in holidays:
        if holiday.month == month:
            factor *= holiday.impact_factor

    for vacation in vacations:
        if vacation.covers_month(month):
            factor *= vacation.impact_factor

    factor *= PEAK_SEASON_BOOSTS.get(month_index, 1.0)

    return factor
