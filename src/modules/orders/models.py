"""Order and OrderItem models.

Business rules implemented:
- Status transitions validated against the state machine in ``constants``
  (enforced at service layer through ``Order.can_transition_to``).
- Customer FK uses PROTECT: a customer with orders cannot be removed.
- Items are owned by the order: CASCADE removes them with it.
- OrderItem subtotal is always ``quantity * unit_price`` (calculated on save).
- ``Order.total_amount`` is a cached sum of item subtotals, recomputed by
  every structural mutation of the item list (``add_item`` / ``remove_item``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    PRODUCT_NAME_MAX_LENGTH,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")


class Order(BaseModel):
    """Order aggregate root."""

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CREATED,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=ZERO,
    )

    class Meta:
        db_table = "orders"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(
        self, product_name: str, quantity: int, unit_price: Decimal
    ) -> OrderItem:
        """Persist a new line item and recompute ``total_amount``.

        The order itself is not saved; the caller persists the new total.
        """
        if self._state.adding:
            raise ValueError("Save the order before adding items.")
        item = OrderItem(
            order=self,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
        )
        item.save()
        self.recalculate_total()
        return item

    def remove_item(self, item: OrderItem) -> None:
        """Delete a line item of this order and recompute ``total_amount``."""
        if item.order_id != self.id:
            raise ValueError(f"Item {item.id} does not belong to order {self.id}.")
        item.delete()
        self.recalculate_total()

    def recalculate_total(self) -> Decimal:
        """Set ``total_amount`` to the exact sum of current item subtotals."""
        # Drop any prefetched items so the sum reflects the database.
        getattr(self, "_prefetched_objects_cache", {}).pop("items", None)
        self.total_amount = sum((item.subtotal for item in self.items.all()), ZERO)
        return self.total_amount

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order #{self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item of an Order.

    ``subtotal`` is always ``quantity * unit_price``, recalculated on every
    save.  Items hold their owning order's id only; they have no lifecycle
    outside the order.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product_name: models.CharField = models.CharField(
        max_length=PRODUCT_NAME_MAX_LENGTH
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(ZERO)],
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_price__gte=0),
                name="order_items_unit_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})
        if self.unit_price is not None and self.unit_price < 0:
            raise ValidationError({"unit_price": "Unit price must not be negative."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def calculate_subtotal(self) -> Decimal:
        if self.quantity is None or self.unit_price is None:
            self.subtotal = ZERO
        else:
            self.subtotal = Decimal(self.unit_price) * self.quantity
        return self.subtotal

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.calculate_subtotal()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "subtotal" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["subtotal"]
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} (${self.subtotal})"
