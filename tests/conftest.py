from decimal import Decimal
from uuid import uuid4

import pytest

from rest_framework.test import APIClient

from modules.catalog.models import Product, Service
from modules.orders.constants import OrderStatusType
from modules.orders.models import Order, OrderItem, OrderStatus


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Catalog / order fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def statuses():
    """Status rows keyed by catalog entry (seeded by migration)."""
    return {
        status_type: OrderStatus.objects.get(name=status_type.value)
        for status_type in OrderStatusType
    }


@pytest.fixture()
def service():
    return Service.objects.create(name="Streaming")


@pytest.fixture()
def other_service():
    return Service.objects.create(name="Gift Cards")


@pytest.fixture()
def product(service):
    return Product.objects.create(
        service=service,
        name="Music Monthly",
        unit_cost=Decimal("0.80"),
        unit_price=Decimal("0.90"),
    )


@pytest.fixture()
def other_product(other_service):
    return Product.objects.create(
        service=other_service,
        name="Store Card 25",
        unit_cost=Decimal("23.00"),
        unit_price=Decimal("25.00"),
    )


@pytest.fixture()
def make_order(statuses):
    """Factory creating an order with items directly through the ORM.

    ``items`` is a list of ``(product, quantity)`` pairs; each item uses
    the product's own service.  ``created_at`` overrides the creation
    timestamp (auto_now_add ignores values passed to ``create``).
    """

    def _make(
        items,
        status=OrderStatusType.CREATED,
        created_at=None,
        reseller_id=None,
        customer_id=None,
    ):
        order = Order.objects.create(
            reseller_id=reseller_id or uuid4(),
            customer_id=customer_id or uuid4(),
            status=statuses[status],
        )
        for item_product, quantity in items:
            OrderItem.objects.create(
                order=order,
                product=item_product,
                service=item_product.service,
                quantity=quantity,
            )
        if created_at is not None:
            Order.objects.filter(id=order.id).update(created_at=created_at)
            order.refresh_from_db()
        return order

    return _make
