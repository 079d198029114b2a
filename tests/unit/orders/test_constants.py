"""Unit tests for the order status catalog.

Covers:
- Catalog order and display names.
- Case-insensitive, trimmed name resolution plus the variant aliases.
- Names with inner separators inserted do not resolve.
- Blank and unknown names resolve to ``None``.
- No two entries share a lookup key.
- Seeded ``OrderStatus`` rows match the catalog.
"""

from __future__ import annotations

import pytest

from modules.orders.constants import (
    INITIAL_STATUS,
    PROFIT_STATUS,
    OrderStatusType,
    all_status_names,
    normalise_status_name,
    parse_status_name,
)
from modules.orders.models import OrderStatus

pytestmark = pytest.mark.unit


class TestCatalog:
    def test_names_in_catalog_order(self):
        assert all_status_names() == [
            "Created",
            "Pending",
            "Processing",
            "In Progress",
            "Shipped",
            "Delivered",
            "Completed",
            "Cancelled",
            "Failed",
        ]

    def test_initial_status_is_created(self):
        assert INITIAL_STATUS == OrderStatusType.CREATED
        assert INITIAL_STATUS.value == "Created"

    def test_profit_status_is_completed(self):
        assert PROFIT_STATUS.value == "Completed"

    def test_lookup_keys_are_unique(self):
        keys = [normalise_status_name(s.value) for s in OrderStatusType]
        assert len(keys) == len(set(keys))

    def test_every_status_is_seeded(self):
        seeded = set(OrderStatus.objects.values_list("name", flat=True))
        assert seeded == set(all_status_names())


class TestParseStatusName:
    @pytest.mark.parametrize(
        "raw",
        ["Processing", "processing", "PROCESSING", "  pRoCeSsInG  "],
    )
    def test_any_casing_resolves(self, raw):
        assert parse_status_name(raw) is OrderStatusType.PROCESSING

    @pytest.mark.parametrize(
        "raw",
        ["In Progress", "in progress", "InProgress", "inprogress", "IN_PROGRESS"],
    )
    def test_in_progress_variants_resolve(self, raw):
        assert parse_status_name(raw) is OrderStatusType.IN_PROGRESS

    @pytest.mark.parametrize("raw", ["NotARealStatus", "Complete", "Shipping"])
    def test_unknown_name_returns_none(self, raw):
        assert parse_status_name(raw) is None

    @pytest.mark.parametrize(
        "raw",
        ["Com-ple-ted", "P e n d i n g", "can_cel_led", "In-Progress", "In  Progress"],
    )
    def test_inner_separators_are_not_ignored(self, raw):
        assert parse_status_name(raw) is None

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_blank_name_returns_none(self, raw):
        assert parse_status_name(raw) is None

    def test_every_display_name_round_trips(self):
        for status in OrderStatusType:
            assert parse_status_name(status.value) is status
