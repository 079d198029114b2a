"""Order service layer (Use Cases).

Validates inputs, enforces referential integrity against the product and
service catalogs, resolves status names through the status catalog and
turns storage outcomes into domain results.  Persistence is delegated to
the injected ``IOrderRepository``; the service itself holds no state
between calls.

Business rules enforced:
- Creation preconditions, first failure wins: input present, reseller id,
  customer id, at least one item.
- New orders start in the "Created" status; an unseeded catalog is an
  internal creation failure.
- Every referenced product and service must exist before anything is
  written; order + items are written atomically.
- Status names are resolved case-insensitively against the in-memory
  catalog; unknown names are rejected as invalid input before storage is
  touched.  Any status may follow any other.
- Profit reports cover completed orders only, grouped by calendar month.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog
import uuid6

from modules.orders.constants import (
    INITIAL_STATUS,
    all_status_names,
    parse_status_name,
)
from modules.orders.dtos import OrderDetailDTO, OrderSummaryDTO
from modules.orders.exceptions import (
    EmptyOrder,
    InvalidCustomer,
    InvalidOrderId,
    InvalidOrderStatus,
    InvalidReseller,
    MissingOrderInput,
    OrderCreationFailed,
    OrderNotFound,
    OrderUpdateFailed,
    ProductNotFound,
    ServiceNotFound,
    StatusNotFound,
)
from modules.orders.profit import (
    aggregate_profit_by_month,
    profit_window,
    validate_profit_period,
)

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO, ProfitByMonthDTO
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

NIL_UUID = UUID(int=0)


def _is_nil(value: Optional[UUID]) -> bool:
    return value is None or value == NIL_UUID


class OrderService:
    """Application service for Order use-cases.

    Receives the order repository via constructor injection (DIP).
    """

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: Optional[CreateOrderDTO]) -> UUID:
        """Create a new order and return its id.

        Steps:
        1. Check the input preconditions in order.
        2. Resolve the initial "Created" status row.
        3. Check that every distinct product id exists, then every
           distinct service id.
        4. Generate the order id and persist order + items atomically.

        Raises:
            MissingOrderInput: ``dto`` is ``None``.
            InvalidReseller: reseller id is nil.
            InvalidCustomer: customer id is nil.
            EmptyOrder: no items.
            ProductNotFound: a referenced product does not exist.
            ServiceNotFound: a referenced service does not exist.
            OrderCreationFailed: catalog unseeded or the write failed.
        """
        if dto is None:
            raise MissingOrderInput("Create order input is required.")
        if _is_nil(dto.reseller_id):
            raise InvalidReseller("Reseller ID is required.")
        if _is_nil(dto.customer_id):
            raise InvalidCustomer("Customer ID is required.")
        if not dto.items:
            raise EmptyOrder("Order must contain at least one item.")

        log = logger.bind(
            reseller_id=str(dto.reseller_id),
            customer_id=str(dto.customer_id),
            item_count=len(dto.items),
        )
        log.info("order.creation_started")

        created_status = self._order_repo.get_status(INITIAL_STATUS)
        if created_status is None:
            log.error("order.status_catalog_unseeded", status=INITIAL_STATUS.value)
            raise OrderCreationFailed("Failed to create order.")

        product_ids = {item.product_id for item in dto.items}
        if self._order_repo.count_existing_products(product_ids) < len(product_ids):
            log.warning("order.product_not_found", product_ids=len(product_ids))
            raise ProductNotFound("One or more products not found.")

        service_ids = {item.service_id for item in dto.items}
        if self._order_repo.count_existing_services(service_ids) < len(service_ids):
            log.warning("order.service_not_found", service_ids=len(service_ids))
            raise ServiceNotFound("One or more services not found.")

        order_id = uuid6.uuid7()
        written = self._order_repo.insert_order(
            {
                "id": order_id,
                "reseller_id": dto.reseller_id,
                "customer_id": dto.customer_id,
                "status_id": created_status.id,
            },
            [
                {
                    "product_id": item.product_id,
                    "service_id": item.service_id,
                    "quantity": item.quantity,
                }
                for item in dto.items
            ],
        )
        if not written:
            log.error("order.creation_failed", order_id=str(order_id))
            raise OrderCreationFailed("Failed to create order.")

        log.info("order.created", order_id=str(order_id))
        return order_id

    def update_order_status(self, order_id: Optional[UUID], status_name: str) -> bool:
        """Move an order to the named status.

        Returns ``True`` once the new status is persisted.

        Raises:
            InvalidOrderId: ``order_id`` is nil.
            InvalidOrderStatus: blank or unknown status name.
            OrderNotFound: no order has this id.
            StatusNotFound: the status row is not seeded.
            OrderUpdateFailed: the status could not be persisted.
        """
        if _is_nil(order_id):
            raise InvalidOrderId("Order ID is required.")
        if not status_name or not status_name.strip():
            raise InvalidOrderStatus("Status name is required.")

        status_type = parse_status_name(status_name)
        if status_type is None:
            raise InvalidOrderStatus(_unknown_status_message(status_name))

        log = logger.bind(order_id=str(order_id), requested_status=status_type.value)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            log.info("order.not_found")
            raise OrderNotFound("Order not found.")

        status_row = self._order_repo.get_status(status_type)
        if status_row is None:
            log.error("order.status_row_missing")
            raise StatusNotFound(f"Status '{status_type.value}' not found.")

        if not self._order_repo.update_order_status(order_id, status_row.id):
            log.error("order.status_update_failed")
            raise OrderUpdateFailed("Failed to update order status.")

        log.info(
            "order.status_updated",
            old_status=order.status.name,
            new_status=status_row.name,
        )
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(self) -> List[OrderSummaryDTO]:
        """Return every order summary, most recent first."""
        return [OrderSummaryDTO.from_entity(o) for o in self._order_repo.list()]

    def get_order(self, order_id: Optional[UUID]) -> Optional[OrderDetailDTO]:
        """Return the order with its items, or ``None`` if it does not exist."""
        if _is_nil(order_id):
            return None
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            return None
        return OrderDetailDTO.from_entity(order)

    def list_orders_by_status(self, status_name: str) -> List[OrderSummaryDTO]:
        """Return summaries of orders in the named status, most recent first.

        Raises:
            InvalidOrderStatus: blank or unknown status name.
        """
        if not status_name or not status_name.strip():
            raise InvalidOrderStatus("Status name is required.")
        status_type = parse_status_name(status_name)
        if status_type is None:
            raise InvalidOrderStatus(_unknown_status_message(status_name))

        status_row = self._order_repo.get_status(status_type)
        if status_row is None:
            logger.warning("order.status_row_missing", status=status_type.value)
            return []

        orders = self._order_repo.list_by_status(status_row.id)
        return [OrderSummaryDTO.from_entity(o) for o in orders]

    def get_profit_by_month(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> List[ProfitByMonthDTO]:
        """Profit and order count per month over completed orders.

        Raises:
            InvalidProfitPeriod: invalid year/month combination.
        """
        validate_profit_period(year, month)
        start, end = profit_window(year, month)
        orders = self._order_repo.list_completed_orders(start, end)
        report = aggregate_profit_by_month(orders)
        logger.info(
            "order.profit_computed",
            year=year,
            month=month,
            months=len(report),
            orders=len(orders),
        )
        return report


def _unknown_status_message(status_name: str) -> str:
    return (
        f"Status '{status_name}' not found. Valid statuses: "
        f"{', '.join(all_status_names())} (case-insensitive)."
    )
