"""Order repository interface.

Extends ``IReadRepository[Order]`` with the operations the order engine
needs from storage: status-catalog lookup, existence counts for catalog
references, atomic creation with items, status updates and the filtered
fetch behind the profit report.

Write operations report failure by returning ``False`` instead of
raising, so storage exceptions never travel past the Service Layer.
The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IReadRepository

if TYPE_CHECKING:
    from modules.orders.constants import OrderStatusType
    from modules.orders.models import Order, OrderStatus


class IOrderRepository(IReadRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Reads return
    orders with status, items, products and services eager-loaded, newest
    first.
    """

    @abstractmethod
    def get_by_id(self, id: UUID) -> Optional[Order]:
        """Retrieve one order, or ``None`` for unknown or malformed ids."""

    @abstractmethod
    def list(self) -> List[Order]:
        """List all orders, most recent first."""

    @abstractmethod
    def list_by_status(self, status_id: UUID) -> List[Order]:
        """List orders currently in the given status row, most recent first."""

    @abstractmethod
    def get_status(self, status: OrderStatusType) -> Optional[OrderStatus]:
        """Resolve a catalog entry to its seeded ``OrderStatus`` row."""

    @abstractmethod
    def count_existing_products(self, ids: Iterable[UUID]) -> int:
        """Number of distinct ids in *ids* that match a product."""

    @abstractmethod
    def count_existing_services(self, ids: Iterable[UUID]) -> int:
        """Number of distinct ids in *ids* that match a service."""

    @abstractmethod
    def insert_order(
        self, order: Dict[str, Any], items: List[Dict[str, Any]]
    ) -> bool:
        """Persist an order and all its items atomically.

        ``order`` keys: ``id``, ``reseller_id``, ``customer_id``,
        ``status_id``.  Each item has ``product_id``, ``service_id`` and
        ``quantity``.  Returns ``False`` when nothing was written.
        """

    @abstractmethod
    def update_order_status(self, id: UUID, status_id: UUID) -> bool:
        """Point the order at another status row.

        Returns ``False`` if the order vanished or the write failed.
        """

    @abstractmethod
    def list_completed_orders(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Order]:
        """Completed orders created in ``[start, end)`` with product pricing.

        ``None`` bounds are open.
        """
