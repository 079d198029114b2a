"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain ``InvalidArgument`` and ``NotFound`` errors are re-raised as the
matching DRF exceptions so the project exception handler renders them in
the same envelope as every other error.
``InternalFailure`` propagates to the project exception handler,
which answers with a generic 500.
"""

from __future__ import annotations

from uuid import UUID

from rest_framework import exceptions, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import InvalidArgument, NotFound
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderDetailSerializer,
    OrderSummarySerializer,
    ProfitByMonthQuerySerializer,
    ProfitByMonthSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService

UUID_PATTERN = r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with an injected repository (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    lookup_value_regex = UUID_PATTERN

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(order_repository=OrderDjangoRepository())

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        dto = CreateOrderDTO(
            reseller_id=data["reseller_id"],
            customer_id=data["customer_id"],
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    service_id=item["service_id"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
        )

        try:
            order_id = self._service.create_order(dto)
        except InvalidArgument as exc:
            raise exceptions.ValidationError(str(exc), code="invalid") from exc
        except NotFound as exc:
            raise exceptions.NotFound(str(exc)) from exc

        return Response(
            {"order_id": str(order_id), "message": "Order created successfully."},
            status=status.HTTP_201_CREATED,
            headers={"Location": f"{request.path.rstrip('/')}/{order_id}/"},
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        orders = self._service.list_orders()
        return Response(OrderSummarySerializer(orders, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(UUID(pk)) if pk else None
        if order is None:
            raise exceptions.NotFound("Order not found.")
        return Response(OrderDetailSerializer(order).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"status/(?P<status_name>[^/]+)",
    )
    def by_status(self, request: Request, status_name: str) -> Response:
        """GET /api/v1/orders/status/{status_name}/"""
        try:
            orders = self._service.list_orders_by_status(status_name)
        except InvalidArgument as exc:
            raise exceptions.ValidationError(str(exc), code="invalid") from exc
        return Response(OrderSummarySerializer(orders, many=True).data)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="profit/monthly")
    def profit_by_month(self, request: Request) -> Response:
        """GET /api/v1/orders/profit/monthly/?year=2024&month=5"""
        query = ProfitByMonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            report = self._service.get_profit_by_month(
                year=query.validated_data.get("year"),
                month=query.validated_data.get("month"),
            )
        except InvalidArgument as exc:
            raise exceptions.ValidationError(str(exc), code="invalid") from exc
        return Response(ProfitByMonthSerializer(report, many=True).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/

        Any catalog status may be set from any current status.
        """
        body = UpdateOrderStatusSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        status_name = body.validated_data["status_name"]

        try:
            self._service.update_order_status(UUID(pk), status_name)
        except InvalidArgument as exc:
            raise exceptions.ValidationError(str(exc), code="invalid") from exc
        except NotFound as exc:
            raise exceptions.NotFound(str(exc)) from exc
        return Response(
            {"message": f"Order status updated successfully to '{status_name}'."}
        )
