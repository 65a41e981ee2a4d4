"""Order domain constants.

Defines status choices and the status transitions accepted by the order
state machine (CREATED -> PROCESSING -> COMPLETED).
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    CREATED = "CREATED", "Created"
    PROCESSING = "PROCESSING", "Processing"
    COMPLETED = "COMPLETED", "Completed"


# Non-terminal states may be re-asserted or moved back; see DESIGN.md.
VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.CREATED: {OrderStatus.CREATED, OrderStatus.PROCESSING},
    OrderStatus.PROCESSING: {
        OrderStatus.CREATED,
        OrderStatus.PROCESSING,
        OrderStatus.COMPLETED,
    },
    OrderStatus.COMPLETED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED}

PRODUCT_NAME_MAX_LENGTH = 200

# Largest value a Decimal(10, 2) money column holds.
MAX_AMOUNT = Decimal("99999999.99")

# Upper bound of a PositiveIntegerField on every supported database.
MAX_QUANTITY = 2147483647
