"""Monthly profit aggregation over completed orders.

The store only filters (status + creation window); grouping and summing
happen here, in ``Decimal``, so the figures are exact and identical on
every database backend.  Every matching order is loaded into memory,
which is fine at current volumes.
"""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from django.utils import timezone

from modules.orders.dtos import ProfitByMonthDTO
from modules.orders.exceptions import InvalidProfitPeriod

if TYPE_CHECKING:
    from modules.orders.models import Order

MIN_YEAR_EXCLUSIVE = 1900

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

Window = Tuple[Optional[datetime], Optional[datetime]]


def validate_profit_period(
    year: Optional[int],
    month: Optional[int],
    current_year: Optional[int] = None,
) -> None:
    """Reject out-of-range filters.

    Raises:
        InvalidProfitPeriod: year not in ``(1900, current_year + 1]``,
            month not in ``1..12``, or month given without a year.
    """
    if current_year is None:
        current_year = timezone.now().year

    if year is not None and not MIN_YEAR_EXCLUSIVE < year <= current_year + 1:
        raise InvalidProfitPeriod(
            f"Year must be greater than {MIN_YEAR_EXCLUSIVE} "
            f"and at most {current_year + 1}."
        )
    if month is not None:
        if not 1 <= month <= 12:
            raise InvalidProfitPeriod("Month must be between 1 and 12.")
        if year is None:
            raise InvalidProfitPeriod("Year is required when month is specified.")


def profit_window(year: Optional[int], month: Optional[int]) -> Window:
    """Half-open UTC ``[start, end)`` window for the requested period.

    ``(None, None)`` means no date restriction.
    """
    if year is None:
        return None, None
    if month is None:
        return (
            datetime(year, 1, 1, tzinfo=dt_timezone.utc),
            datetime(year + 1, 1, 1, tzinfo=dt_timezone.utc),
        )
    start = datetime(year, month, 1, tzinfo=dt_timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=dt_timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=dt_timezone.utc)
    return start, end


def aggregate_profit_by_month(orders: Iterable[Order]) -> List[ProfitByMonthDTO]:
    """Group *orders* by UTC (year, month) of creation, newest month first."""
    groups: Dict[Tuple[int, int], List] = {}
    for order in orders:
        created = order.created_at.astimezone(dt_timezone.utc)
        bucket = groups.setdefault((created.year, created.month), [Decimal("0.00"), 0])
        bucket[0] += order.total_profit
        bucket[1] += 1

    return [
        ProfitByMonthDTO(
            year=year,
            month=month,
            month_name=MONTH_NAMES[month - 1],
            total_profit=total_profit,
            order_count=order_count,
        )
        for (year, month), (total_profit, order_count) in sorted(
            groups.items(), reverse=True
        )
    ]
