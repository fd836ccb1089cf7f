from datetime import date
from decimal import Decimal

import pytest

from dayflow.core.dates import (
    days_in_month, inclusive_day_count, iter_dates, month_bounds,
    prorate, round_money, working_days_in_month,
)


@pytest.mark.parametrize("year,month,expected", [
    (2025, 1, 31),
    (2025, 2, 28),
    (2024, 2, 29),
    (2025, 4, 30),
    (2025, 6, 30),
])
def test_days_in_month_counts_calendar_days(year, month, expected):
    assert days_in_month(year, month) == expected


def test_working_days_excludes_weekends():
    # June 2025: 30 days, 9 weekend days
    assert working_days_in_month(2025, 6) == 21
    # February 2025 starts on a Saturday
    assert working_days_in_month(2025, 2) == 20


def test_month_bounds_use_real_month_end():
    assert month_bounds(2025, 2) == (date(2025, 2, 1), date(2025, 2, 28))
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))


def test_iter_dates_is_inclusive_and_crosses_months():
    days = list(iter_dates(date(2025, 1, 30), date(2025, 2, 2)))
    assert days == [date(2025, 1, 30), date(2025, 1, 31), date(2025, 2, 1), date(2025, 2, 2)]
    assert inclusive_day_count(date(2025, 1, 30), date(2025, 2, 2)) == 4
    assert inclusive_day_count(date(2025, 3, 10), date(2025, 3, 10)) == 1


def test_round_money_rounds_halves_up():
    assert round_money(Decimal("2.5")) == 3
    assert round_money(Decimal("3.5")) == 4
    assert round_money(Decimal("2.4999")) == 2
    assert round_money(0.5) == 1


def test_round_money_negative_halves_go_toward_zero():
    assert round_money(Decimal("-200.5")) == -200
    assert round_money(Decimal("-2.5")) == -2
    assert round_money(Decimal("-2.51")) == -3
    assert round_money(Decimal("-0.4")) == 0


def test_prorate_multiplies_before_dividing():
    assert prorate(30000, 22, 30) == Decimal("22000")
    assert prorate(1000, 0, 30) == 0
    assert prorate(1000, 10, 0) == 0
