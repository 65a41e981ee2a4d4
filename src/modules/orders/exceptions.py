"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exceptions.api_exception_handler`` translates them into
HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import BusinessRuleViolation, ResourceNotFound
from modules.customers.exceptions import CustomerNotFound


class OrderNotFound(ResourceNotFound):
    """The requested order does not exist."""

    entity = "Order"


class InvalidOrderStatus(BusinessRuleViolation):
    """An invalid status transition was attempted."""


__all__ = ["CustomerNotFound", "InvalidOrderStatus", "OrderNotFound"]
