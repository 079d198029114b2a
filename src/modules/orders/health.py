"""Health probe checking that the order status catalog is fully seeded."""

from typing import Any, Dict

from modules.core.views import HealthCheckFailed
from modules.orders.constants import all_status_names
from modules.orders.models import OrderStatus


def check_status_catalog() -> Dict[str, Any]:
    """Every catalog status must have its reference row."""
    expected = set(all_status_names())
    seeded = set(
        OrderStatus.objects.filter(name__in=expected).values_list("name", flat=True)
    )
    missing = sorted(expected - seeded)
    if missing:
        raise HealthCheckFailed(f"Unseeded order statuses: {', '.join(missing)}")
    return {"statuses": len(seeded)}
