"""Service and Product reference data.

Business rules implemented:
- Products and services are shared reference data; orders read them but
  never create, mutate or delete them.
- A product belongs to exactly one service (PROTECT: a service with
  products cannot be removed).
- Unit cost and unit price are non-negative decimals; the order engine
  derives line totals and profit from them at read time.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Service(BaseModel):
    """A service offered by resellers (e.g. "Email", "Antivirus")."""

    name = models.CharField(max_length=100)

    class Meta:
        db_table = "order_services"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Product(BaseModel):
    """A sellable product priced per unit, owned by a ``Service``."""

    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.PROTECT,
        related_name="products",
    )
    name = models.CharField(max_length=255)
    unit_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "order_products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(unit_cost__gte=0),
                name="order_products_unit_cost_non_negative",
            ),
            models.CheckConstraint(
                check=models.Q(unit_price__gte=0),
                name="order_products_unit_price_non_negative",
            ),
        ]

    @property
    def unit_margin(self) -> Decimal:
        """Profit made on a single unit."""
        return self.unit_price - self.unit_cost

    def __str__(self) -> str:
        return self.name
