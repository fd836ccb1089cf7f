"""
Calendar and prorating helpers shared by attendance, leave and payroll.

Money arithmetic runs on Decimal; whole-unit rounding sends halves toward
positive infinity, so -200.5 rounds to -200.
"""
import calendar
from datetime import date, timedelta
from decimal import Decimal, ROUND_FLOOR
from typing import Iterator, Tuple, Union

Number = Union[int, float, Decimal]


def days_in_month(year: int, month: int) -> int:
    """Number of calendar days in the month, weekends included."""
    return calendar.monthrange(year, month)[1]


def working_days_in_month(year: int, month: int) -> int:
    """Monday to Friday count for the month. Used for display summaries only."""
    first, last = month_bounds(year, month)
    return sum(1 for d in iter_dates(first, last) if d.weekday() < 5)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar date of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def inclusive_day_count(start: date, end: date) -> int:
    return (end - start).days + 1


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def prorate(amount: Number, payable_days: int, working_days: int) -> Decimal:
    """Scale a monthly amount by payable_days / working_days."""
    if working_days <= 0:
        return Decimal("0")
    return to_decimal(amount) * payable_days / working_days


def percent_of(amount: Number, percentage: Number) -> Decimal:
    return to_decimal(amount) * to_decimal(percentage) / 100


def round_money(value: Number) -> int:
    """Round to the nearest whole currency unit, halves toward positive infinity."""
    return int((to_decimal(value) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
