"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import InternalFailure, InvalidArgument, NotFound

# ---------------------------------------------------------------------------
# Invalid arguments (always raised before storage is touched)
# ---------------------------------------------------------------------------


class MissingOrderInput(InvalidArgument):
    """No creation input was supplied at all."""


class InvalidReseller(InvalidArgument):
    """The reseller id is missing or nil."""


class InvalidCustomer(InvalidArgument):
    """The customer id is missing or nil."""


class EmptyOrder(InvalidArgument):
    """The order has no items."""


class InvalidOrderId(InvalidArgument):
    """The order id is missing or nil."""


class InvalidOrderStatus(InvalidArgument):
    """The status name is blank or not part of the status catalog."""


class InvalidProfitPeriod(InvalidArgument):
    """The year/month filter of a profit report is out of range."""


# ---------------------------------------------------------------------------
# Missing references
# ---------------------------------------------------------------------------


class OrderNotFound(NotFound):
    """The requested order does not exist."""


class ProductNotFound(NotFound):
    """One or more products referenced by the order items do not exist."""


class ServiceNotFound(NotFound):
    """One or more services referenced by the order items do not exist."""


class StatusNotFound(NotFound):
    """A catalog status has no reference row in the database."""


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------


class OrderCreationFailed(InternalFailure):
    """The order could not be persisted (or the status catalog is unseeded)."""


class OrderUpdateFailed(InternalFailure):
    """The order status change could not be persisted."""
