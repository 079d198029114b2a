"""Order routes, mounted under ``/api/v1/`` by ``config.urls``.

The router exposes the viewset's list/create/retrieve routes plus its
``status/<name>/``, ``profit/monthly/`` and ``<id>/status/`` actions.
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.orders.views import OrderViewSet

app_name = "orders"

router = SimpleRouter(trailing_slash=True)
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
