"""OrderStatus, Order and OrderItem models.

Business rules implemented:
- An order always references exactly one ``OrderStatus`` row.
- Status rows are reference data seeded from ``OrderStatusType``; the
  engine resolves them by name and never creates them on demand.
- Items belong exclusively to their order (CASCADE).  Products and
  services are shared catalog rows (PROTECT).
- Item quantity is a positive integer (check constraint).
- Cost, price and profit are derived from the referenced product at read
  time; nothing monetary is stored on the order or its items.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatusType

ZERO = Decimal("0.00")


class OrderStatus(BaseModel):
    """Reference row for one entry of the status catalog."""

    name = models.CharField(
        max_length=32,
        unique=True,
        choices=OrderStatusType.choices,
    )

    class Meta:
        db_table = "order_statuses"
        ordering = ["name"]
        verbose_name_plural = "order statuses"

    def __str__(self) -> str:
        return self.name


class Order(BaseModel):
    """Order aggregate root.

    ``reseller_id`` and ``customer_id`` are opaque identities owned by
    other systems, so they are plain UUID columns rather than foreign keys.
    ``created_at`` (UTC) is the creation timestamp used for reporting.
    """

    reseller_id = models.UUIDField(db_index=True)
    customer_id = models.UUIDField(db_index=True)
    status = models.ForeignKey(
        "orders.OrderStatus",
        on_delete=models.PROTECT,
        related_name="orders",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Derived totals (items and their products must be prefetched)
    # ------------------------------------------------------------------

    @property
    def item_count(self) -> int:
        return len(self.items.all())

    @property
    def total_cost(self) -> Decimal:
        return sum((item.total_cost for item in self.items.all()), ZERO)

    @property
    def total_price(self) -> Decimal:
        return sum((item.total_price for item in self.items.all()), ZERO)

    @property
    def total_profit(self) -> Decimal:
        """Sum over items of ``(unit_price - unit_cost) * quantity``."""
        return sum((item.profit for item in self.items.all()), ZERO)

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product of a given Service."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = "order_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def unit_cost(self) -> Decimal:
        return self.product.unit_cost

    @property
    def unit_price(self) -> Decimal:
        return self.product.unit_price

    @property
    def total_cost(self) -> Decimal:
        return self.unit_cost * self.quantity

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def profit(self) -> Decimal:
        return self.product.unit_margin * self.quantity

    def __str__(self) -> str:
        return f"{self.product} x{self.quantity}"
