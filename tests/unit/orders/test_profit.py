"""Unit tests for monthly profit aggregation helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from modules.orders.exceptions import InvalidProfitPeriod
from modules.orders.profit import (
    MONTH_NAMES,
    aggregate_profit_by_month,
    profit_window,
    validate_profit_period,
)

pytestmark = pytest.mark.unit


def _order(created_at, profit):
    return SimpleNamespace(created_at=created_at, total_profit=Decimal(profit))


class TestValidateProfitPeriod:
    @pytest.mark.parametrize(
        "year,month",
        [(None, None), (2024, None), (2024, 1), (2024, 12), (1901, 6), (2026, None)],
    )
    def test_accepts_valid_period(self, year, month):
        validate_profit_period(year, month, current_year=2025)

    @pytest.mark.parametrize("year", [1899, 1900, 2027, 0, -5])
    def test_rejects_out_of_range_year(self, year):
        with pytest.raises(InvalidProfitPeriod, match="Year must be greater than 1900"):
            validate_profit_period(year, None, current_year=2025)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_rejects_out_of_range_month(self, month):
        with pytest.raises(InvalidProfitPeriod, match="Month must be between 1 and 12"):
            validate_profit_period(2024, month, current_year=2025)

    def test_rejects_month_without_year(self):
        with pytest.raises(InvalidProfitPeriod, match="Year is required"):
            validate_profit_period(None, 5, current_year=2025)

    def test_year_checked_before_month(self):
        with pytest.raises(InvalidProfitPeriod, match="Year must be"):
            validate_profit_period(1800, 13, current_year=2025)


class TestProfitWindow:
    def test_no_filter(self):
        assert profit_window(None, None) == (None, None)

    def test_month_window_is_half_open(self):
        start, end = profit_window(2024, 5)
        assert start == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert end == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_december_rolls_over(self):
        start, end = profit_window(2024, 12)
        assert start == datetime(2024, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_year_window(self):
        start, end = profit_window(2024, None)
        assert start == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestAggregateProfitByMonth:
    def test_empty(self):
        assert aggregate_profit_by_month([]) == []

    def test_groups_by_month_newest_first(self):
        orders = [
            _order(datetime(2024, 5, 3, tzinfo=timezone.utc), "0.20"),
            _order(datetime(2024, 5, 31, 23, 59, tzinfo=timezone.utc), "1.30"),
            _order(datetime(2024, 3, 10, tzinfo=timezone.utc), "5.00"),
            _order(datetime(2023, 12, 1, tzinfo=timezone.utc), "2.50"),
        ]

        rows = aggregate_profit_by_month(orders)

        assert [(r.year, r.month) for r in rows] == [(2024, 5), (2024, 3), (2023, 12)]
        assert rows[0].total_profit == Decimal("1.50")
        assert rows[0].order_count == 2
        assert rows[0].month_name == "May"
        assert rows[2].month_name == "December"

    def test_groups_by_utc_month(self):
        # 2024-06-01 01:00 at UTC+03:00 is still May in UTC.
        plus_three = timezone(timedelta(hours=3))
        rows = aggregate_profit_by_month(
            [_order(datetime(2024, 6, 1, 1, 0, tzinfo=plus_three), "1.00")]
        )
        assert (rows[0].year, rows[0].month) == (2024, 5)

    def test_month_names_are_english(self):
        assert MONTH_NAMES[0] == "January"
        assert len(MONTH_NAMES) == 12
