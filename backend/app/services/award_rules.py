"""
Fixed pay arithmetic shared by the calculator and the rule builder.
Rates themselves always come from the database.
"""
from decimal import Decimal
from typing import Optional

# Standard full-time ordinary hours per week; not configurable per award
STANDARD_WEEKLY_HOURS = 38
WEEKS_PER_YEAR = 52

NO_PENALTY_MULTIPLIER = Decimal("1.00")

UNIT_PER_HOUR = "per_hour"
UNIT_PER_WEEK = "per_week"


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def penalty_hourly_rate(base_hourly_rate, multiplier) -> Decimal:
    return to_decimal(base_hourly_rate) * to_decimal(multiplier)


def penalty_weekly_rate(base_hourly_rate, multiplier) -> Decimal:
    return penalty_hourly_rate(base_hourly_rate, multiplier) * STANDARD_WEEKLY_HOURS


def penalty_annual_rate(base_hourly_rate, multiplier) -> Decimal:
    return penalty_weekly_rate(base_hourly_rate, multiplier) * WEEKS_PER_YEAR


def weekly_equivalent(amount, unit: str) -> Optional[Decimal]:
    """Weekly value of an allowance, or None when the unit has no weekly basis.

    per_occasion and per_km depend on how often the event happens, so they
    are left out of weekly totals.
    """
    unit_key = (unit or "").strip().lower()
    if unit_key == UNIT_PER_HOUR:
        return to_decimal(amount) * STANDARD_WEEKLY_HOURS
    if unit_key == UNIT_PER_WEEK:
        return to_decimal(amount)
    return None
