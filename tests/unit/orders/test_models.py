"""Unit tests for OrderStatus, Order and OrderItem models.

Covers:
- UUIDv7 primary keys and timestamps (inherited from BaseModel).
- Status FK with PROTECT.
- Derived line and order totals read from the product catalog.
- OrderItem quantity check constraint (>= 1).
- Items cascade with their order; products are protected.
- Default ordering: newest first.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from modules.orders.constants import OrderStatusType
from modules.orders.models import Order, OrderItem, OrderStatus

pytestmark = pytest.mark.unit


class TestOrderStatus:
    def test_str_is_name(self, statuses):
        assert str(statuses[OrderStatusType.IN_PROGRESS]) == "In Progress"

    def test_name_is_unique(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderStatus.objects.create(name="Created")

    def test_status_in_use_is_protected(self, make_order, statuses):
        make_order([])
        with pytest.raises(ProtectedError):
            statuses[OrderStatusType.CREATED].delete()


class TestOrder:
    def test_primary_key_is_uuid7(self, make_order):
        order = make_order([])
        assert order.id.version == 7

    def test_created_at_is_set(self, make_order):
        order = make_order([])
        assert order.created_at is not None
        assert order.updated_at is not None

    def test_totals(self, make_order, product, other_product):
        order = make_order([(product, 2), (other_product, 3)])
        assert order.item_count == 2
        assert order.total_cost == Decimal("70.60")
        assert order.total_price == Decimal("76.80")
        assert order.total_profit == Decimal("6.20")

    def test_totals_follow_current_product_prices(self, make_order, product):
        order = make_order([(product, 2)])
        product.unit_price = Decimal("1.00")
        product.save()

        fresh = Order.objects.get(id=order.id)
        assert fresh.total_profit == Decimal("0.40")

    def test_default_ordering_newest_first(self, make_order):
        now = datetime.now(timezone.utc)
        older = make_order([], created_at=now - timedelta(days=2))
        newer = make_order([], created_at=now - timedelta(days=1))
        assert list(Order.objects.values_list("id", flat=True)) == [newer.id, older.id]

    def test_str_contains_status(self, make_order):
        order = make_order([])
        assert "Created" in str(order)


class TestOrderItem:
    def test_line_totals(self, make_order, product):
        order = make_order([(product, 2)])
        item = order.items.get()
        assert item.unit_cost == Decimal("0.80")
        assert item.unit_price == Decimal("0.90")
        assert item.total_cost == Decimal("1.60")
        assert item.total_price == Decimal("1.80")
        assert item.profit == Decimal("0.20")

    def test_zero_quantity_violates_constraint(self, make_order, product):
        order = make_order([])
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderItem.objects.create(
                order=order, product=product, service=product.service, quantity=0
            )

    def test_items_cascade_with_order(self, make_order, product):
        order = make_order([(product, 1)])
        order.delete()
        assert OrderItem.objects.count() == 0

    def test_product_in_use_is_protected(self, make_order, product):
        make_order([(product, 1)])
        with pytest.raises(ProtectedError):
            product.delete()

    def test_str(self, make_order, product):
        order = make_order([(product, 4)])
        assert str(order.items.get()) == "Music Monthly x4"

    def test_reseller_and_customer_are_plain_ids(self, make_order):
        reseller, customer = uuid4(), uuid4()
        order = make_order([], reseller_id=reseller, customer_id=customer)
        assert order.reseller_id == reseller
        assert order.customer_id == customer
