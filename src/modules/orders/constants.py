"""Order status catalog.

Defines the fixed, ordered set of order statuses and the case-insensitive
name lookup shared by the creation, update and listing paths.  The value
of each choice is its canonical display name, which is also the ``name``
stored on the matching ``OrderStatus`` reference row.

Status transitions are unrestricted: any status may be set from any
other status.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from django.core.exceptions import ImproperlyConfigured
from django.db import models


class OrderStatusType(models.TextChoices):
    CREATED = "Created", "Created"
    PENDING = "Pending", "Pending"
    PROCESSING = "Processing", "Processing"
    IN_PROGRESS = "In Progress", "In Progress"
    SHIPPED = "Shipped", "Shipped"
    DELIVERED = "Delivered", "Delivered"
    COMPLETED = "Completed", "Completed"
    CANCELLED = "Cancelled", "Cancelled"
    FAILED = "Failed", "Failed"


INITIAL_STATUS = OrderStatusType.CREATED
PROFIT_STATUS = OrderStatusType.COMPLETED

# Extra spellings accepted on input besides the display value and the
# member name.
_STATUS_ALIASES: Dict[OrderStatusType, Tuple[str, ...]] = {
    OrderStatusType.IN_PROGRESS: ("InProgress",),
}


def normalise_status_name(name: str) -> str:
    """Fold a status name to its lookup key ("  In Progress " -> "in progress")."""
    return name.strip().casefold()


def _build_lookup() -> Dict[str, OrderStatusType]:
    lookup: Dict[str, OrderStatusType] = {}
    for status in OrderStatusType:
        for alias in (status.value, status.name, *_STATUS_ALIASES.get(status, ())):
            key = normalise_status_name(alias)
            existing = lookup.get(key)
            if existing is not None and existing is not status:
                raise ImproperlyConfigured(
                    f"Order statuses {existing.name} and {status.name} "
                    f"both normalise to '{key}'."
                )
            lookup[key] = status
    return lookup


_STATUS_LOOKUP = _build_lookup()


def parse_status_name(name: Optional[str]) -> Optional[OrderStatusType]:
    """Resolve *name* to a catalog entry, or ``None`` if it is not one.

    Matching ignores case and surrounding whitespace only.  Besides the
    display name it accepts the member name ("IN_PROGRESS") and the
    listed aliases ("InProgress").
    """
    if not name or not name.strip():
        return None
    return _STATUS_LOOKUP.get(normalise_status_name(name))


def all_status_names() -> List[str]:
    """Canonical display names in catalog order."""
    return [status.value for status in OrderStatusType]
