"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``OrderItemOutputDTO``: output for a single line item with pricing.
- ``OrderSummaryDTO``: list output with item count and totals.
- ``OrderDetailDTO``: summary plus the full item list.
- ``ProfitByMonthDTO``: one row of the monthly profit report.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    Unit cost and price are never accepted from the caller; they are read
    from the product catalog whenever the order is fetched.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    service_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Ids and the item list are checked by ``OrderService.create_order`` so
    that the first failing rule (reseller, customer, items) is the one
    reported.
    """

    model_config = ConfigDict(frozen=True)

    reseller_id: UUID
    customer_id: UUID
    items: List[CreateOrderItemDTO] = []


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderItemOutputDTO(BaseModel):
    """Immutable DTO for one order line with prices read from its product."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    order_id: UUID
    product_id: UUID
    product_name: str
    service_id: UUID
    service_name: str
    quantity: int
    unit_cost: Decimal
    unit_price: Decimal
    total_cost: Decimal
    total_price: Decimal

    @classmethod
    def from_entity(cls, item: OrderItem) -> OrderItemOutputDTO:
        return cls(
            id=item.id,
            order_id=item.order_id,
            product_id=item.product_id,
            product_name=item.product.name,
            service_id=item.service_id,
            service_name=item.service.name,
            quantity=item.quantity,
            unit_cost=item.unit_cost,
            unit_price=item.unit_price,
            total_cost=item.total_cost,
            total_price=item.total_price,
        )


class OrderSummaryDTO(BaseModel):
    """Immutable DTO for order list responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    status_name: str
    item_count: int
    total_cost: Decimal
    total_price: Decimal
    created_date: datetime

    @classmethod
    def from_entity(cls, order: Order) -> OrderSummaryDTO:
        """Build a summary from an Order with status, items and products loaded."""
        return cls(**_summary_fields(order))


class OrderDetailDTO(OrderSummaryDTO):
    """Summary fields plus every item of the order."""

    items: List[OrderItemOutputDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderDetailDTO:
        items = [OrderItemOutputDTO.from_entity(item) for item in order.items.all()]
        return cls(**_summary_fields(order), items=items)


class ProfitByMonthDTO(BaseModel):
    """Immutable DTO for one (year, month) group of the profit report."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    month_name: str
    total_profit: Decimal
    order_count: int


def _summary_fields(order: Order) -> dict:
    return {
        "id": order.id,
        "reseller_id": order.reseller_id,
        "customer_id": order.customer_id,
        "status_id": order.status_id,
        "status_name": order.status.name,
        "item_count": order.item_count,
        "total_cost": order.total_cost,
        "total_price": order.total_price,
        "created_date": order.created_at,
    }
