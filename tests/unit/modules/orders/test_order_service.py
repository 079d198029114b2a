"""OrderService failure paths with a mocked repository.

Storage outcomes that are hard to provoke against a real database
(unseeded catalog, failed writes) are simulated here, along with checks
that invalid input never reaches the repository.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatusType
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    EmptyOrder,
    InvalidOrderStatus,
    OrderCreationFailed,
    OrderUpdateFailed,
    ProductNotFound,
    StatusNotFound,
)
from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    mock = MagicMock(spec=IOrderRepository)
    mock.get_status.return_value = SimpleNamespace(id=uuid4(), name="Created")
    mock.count_existing_products.side_effect = lambda ids: len(set(ids))
    mock.count_existing_services.side_effect = lambda ids: len(set(ids))
    mock.insert_order.return_value = True
    mock.update_order_status.return_value = True
    mock.get_by_id.return_value = SimpleNamespace(
        id=uuid4(), status=SimpleNamespace(name="Created")
    )
    return mock


@pytest.fixture()
def order_service(repo):
    return OrderService(order_repository=repo)


def _dto(items=1):
    return CreateOrderDTO(
        reseller_id=uuid4(),
        customer_id=uuid4(),
        items=[
            CreateOrderItemDTO(product_id=uuid4(), service_id=uuid4(), quantity=1)
            for _ in range(items)
        ],
    )


class TestCreateOrderFailures:
    def test_invalid_input_never_touches_storage(self, order_service, repo):
        with pytest.raises(EmptyOrder):
            order_service.create_order(_dto(items=0))
        assert repo.mock_calls == []

    def test_unseeded_catalog_is_internal_failure(self, order_service, repo):
        repo.get_status.return_value = None

        with pytest.raises(OrderCreationFailed):
            order_service.create_order(_dto())

        repo.get_status.assert_called_once_with(OrderStatusType.CREATED)
        repo.insert_order.assert_not_called()

    def test_failed_write_is_internal_failure(self, order_service, repo):
        repo.insert_order.return_value = False
        with pytest.raises(OrderCreationFailed, match="Failed to create order"):
            order_service.create_order(_dto())

    def test_missing_product_skips_service_check(self, order_service, repo):
        repo.count_existing_products.side_effect = None
        repo.count_existing_products.return_value = 0

        with pytest.raises(ProductNotFound):
            order_service.create_order(_dto())

        repo.count_existing_services.assert_not_called()
        repo.insert_order.assert_not_called()

    def test_insert_payload(self, order_service, repo):
        dto = _dto(items=2)

        order_id = order_service.create_order(dto)

        order, items = repo.insert_order.call_args.args
        assert order["id"] == order_id
        assert order["reseller_id"] == dto.reseller_id
        assert order["status_id"] == repo.get_status.return_value.id
        assert [i["quantity"] for i in items] == [1, 1]


class TestUpdateStatusFailures:
    def test_unknown_status_never_touches_storage(self, order_service, repo):
        with pytest.raises(InvalidOrderStatus):
            order_service.update_order_status(uuid4(), "NotARealStatus")
        assert repo.mock_calls == []

    def test_unseeded_status_row(self, order_service, repo):
        repo.get_status.return_value = None
        with pytest.raises(StatusNotFound):
            order_service.update_order_status(uuid4(), "Shipped")
        repo.update_order_status.assert_not_called()

    def test_failed_write_is_internal_failure(self, order_service, repo):
        repo.update_order_status.return_value = False
        with pytest.raises(OrderUpdateFailed):
            order_service.update_order_status(uuid4(), "Shipped")

    def test_resolves_status_before_write(self, order_service, repo):
        order_id = uuid4()
        order_service.update_order_status(order_id, "delivered")
        repo.get_status.assert_called_once_with(OrderStatusType.DELIVERED)
        repo.update_order_status.assert_called_once_with(
            order_id, repo.get_status.return_value.id
        )


class TestListByStatus:
    def test_missing_status_row_returns_empty(self, order_service, repo):
        repo.get_status.return_value = None
        assert order_service.list_orders_by_status("Failed") == []
        repo.list_by_status.assert_not_called()


class TestProfit:
    def test_window_passed_to_repository(self, order_service, repo):
        repo.list_completed_orders.return_value = []

        order_service.get_profit_by_month(2024, 2)

        start, end = repo.list_completed_orders.call_args.args
        assert (start.year, start.month, start.day) == (2024, 2, 1)
        assert (end.year, end.month, end.day) == (2024, 3, 1)

    def test_no_filter_passes_open_window(self, order_service, repo):
        repo.list_completed_orders.return_value = []
        order_service.get_profit_by_month()
        repo.list_completed_orders.assert_called_once_with(None, None)
