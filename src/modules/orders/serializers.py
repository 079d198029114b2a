"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Input serializers only check request shape; business rules live in the
Service Layer, which receives Pydantic DTOs from ``dtos.py``.  Output
serializers render those DTOs.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    product_id = serializers.UUIDField()
    service_id = serializers.UUIDField()
    quantity = serializers.IntegerField(
        min_value=1, max_value=settings.ORDER_MAX_ITEM_QUANTITY
    )


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    reseller_id = serializers.UUIDField()
    customer_id = serializers.UUIDField()
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status_name = serializers.CharField(max_length=64, trim_whitespace=True)


class ProfitByMonthQuerySerializer(serializers.Serializer):
    """Parses the optional ``year``/``month`` query parameters.

    Range checks are done by the service so they apply to every caller.
    """

    year = serializers.IntegerField(required=False)
    month = serializers.IntegerField(required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    order_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(read_only=True)
    service_id = serializers.UUIDField(read_only=True)
    service_name = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    unit_cost = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )
    total_cost = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )
    total_price = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )


class OrderSummarySerializer(serializers.Serializer):
    """Read serializer for ``OrderSummaryDTO``."""

    id = serializers.UUIDField(read_only=True)
    reseller_id = serializers.UUIDField(read_only=True)
    customer_id = serializers.UUIDField(read_only=True)
    status_id = serializers.UUIDField(read_only=True)
    status_name = serializers.CharField(read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    total_cost = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )
    total_price = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )
    created_date = serializers.DateTimeField(read_only=True)


class OrderDetailSerializer(OrderSummarySerializer):
    """Read serializer for ``OrderDetailDTO`` with nested items."""

    items = OrderItemSerializer(many=True, read_only=True)


class ProfitByMonthSerializer(serializers.Serializer):
    year = serializers.IntegerField(read_only=True)
    month = serializers.IntegerField(read_only=True)
    month_name = serializers.CharField(read_only=True)
    total_profit = serializers.DecimalField(
        max_digits=16, decimal_places=2, read_only=True
    )
    order_count = serializers.IntegerField(read_only=True)
