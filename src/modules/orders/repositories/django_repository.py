"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Order creation is wrapped in ``transaction.atomic()`` so the Order
aggregate (Order + OrderItems) is persisted all-or-nothing.

Concurrency control on status updates uses ``select_for_update()``
so concurrent updates of the same order are serialised (no ``version``
field exists on the model).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from modules.catalog.models import Product, Service
from modules.orders.constants import PROFIT_STATUS, OrderStatusType
from modules.orders.models import Order, OrderItem, OrderStatus
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: UUID) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Uses ``select_related`` for the status FK (single JOIN) and
        ``prefetch_related`` for items, items→product and items→service
        (separate batched queries).  Prevents N+1.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._with_relations(Order.objects.filter(id=id)).first()
        except (ValueError, ValidationError):
            return None

    def list(self) -> List[Order]:
        return list(self._with_relations(Order.objects.all()))

    def list_by_status(self, status_id: UUID) -> List[Order]:
        return list(self._with_relations(Order.objects.filter(status_id=status_id)))

    def list_completed_orders(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Order]:
        queryset = Order.objects.filter(status__name__iexact=PROFIT_STATUS.value)
        if start is not None:
            queryset = queryset.filter(created_at__gte=start)
        if end is not None:
            queryset = queryset.filter(created_at__lt=end)
        orders = list(queryset.prefetch_related("items__product"))
        logger.info(
            "order.completed_orders_loaded",
            start=start.isoformat() if start else None,
            end=end.isoformat() if end else None,
            count=len(orders),
        )
        return orders

    @staticmethod
    def _with_relations(queryset: QuerySet) -> QuerySet:
        return (
            queryset.select_related("status")
            .prefetch_related("items__product", "items__service")
            .order_by("-created_at", "-id")
        )

    # ------------------------------------------------------------------
    # Reference look-ups
    # ------------------------------------------------------------------

    def get_status(self, status: OrderStatusType) -> Optional[OrderStatus]:
        return OrderStatus.objects.filter(name__iexact=status.value).first()

    def count_existing_products(self, ids: Iterable[UUID]) -> int:
        unique_ids = set(ids)
        if not unique_ids:
            return 0
        return Product.objects.filter(id__in=unique_ids).count()

    def count_existing_services(self, ids: Iterable[UUID]) -> int:
        unique_ids = set(ids)
        if not unique_ids:
            return 0
        return Service.objects.filter(id__in=unique_ids).count()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert_order(
        self, order: Dict[str, Any], items: List[Dict[str, Any]]
    ) -> bool:
        """Create the order row and its items inside one transaction."""
        log = logger.bind(order_id=str(order["id"]), item_count=len(items))
        try:
            with transaction.atomic():
                created = Order.objects.create(
                    id=order["id"],
                    reseller_id=order["reseller_id"],
                    customer_id=order["customer_id"],
                    status_id=order["status_id"],
                )
                OrderItem.objects.bulk_create(
                    [
                        OrderItem(
                            order=created,
                            product_id=item["product_id"],
                            service_id=item["service_id"],
                            quantity=item["quantity"],
                        )
                        for item in items
                    ]
                )
        except DatabaseError:
            log.exception("order.insert_failed")
            return False

        log.info("order.inserted")
        return True

    def update_order_status(self, id: UUID, status_id: UUID) -> bool:
        """Lock the order row, switch its status and save."""
        log = logger.bind(order_id=str(id), status_id=str(status_id))
        try:
            with transaction.atomic():
                order = Order.objects.select_for_update().filter(id=id).first()
                if order is None:
                    log.warning("order.update_target_missing")
                    return False
                order.status_id = status_id
                order.save(update_fields=["status"])
        except DatabaseError:
            log.exception("order.status_update_failed")
            return False

        log.info("order.status_persisted")
        return True
