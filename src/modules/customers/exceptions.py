"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exceptions.api_exception_handler`` translates them into
HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import BusinessRuleViolation, ResourceNotFound


class CustomerAlreadyExists(BusinessRuleViolation):
    """A customer with the same email or document number already exists."""


class CustomerHasOrders(BusinessRuleViolation):
    """The customer is still referenced by orders and cannot be deleted."""


class CustomerNotFound(ResourceNotFound):
    """The requested customer does not exist."""

    entity = "Customer"
