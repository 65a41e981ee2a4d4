"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``) and camelCase on the
wire.

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderStatusDTO``: input for a status change.
- ``OrderItemOutputDTO``: output for a single line item.
- ``OrderOutputDTO``: output with items.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from modules.orders.constants import (
    MAX_AMOUNT,
    MAX_QUANTITY,
    PRODUCT_NAME_MAX_LENGTH,
)

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


# ---------------------------------------------------------------------------
# Enum (framework-agnostic, NOT Django TextChoices)
# ---------------------------------------------------------------------------


class OrderStatusEnum(StrEnum):
    """Order lifecycle states."""

    CREATED = "CREATED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    product_name: str = Field(max_length=PRODUCT_NAME_MAX_LENGTH)
    quantity: int = Field(ge=1, le=MAX_QUANTITY)
    unit_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    @field_validator("product_name")
    @classmethod
    def product_name_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def subtotal_must_fit(self) -> CreateOrderItemDTO:
        if self.subtotal > MAX_AMOUNT:
            raise ValueError(f"Item subtotal must not exceed {MAX_AMOUNT}.")
        return self

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``customer_id`` is present.
    - ``items`` contains at least one item, each one valid.
    - item subtotals and the order total fit a ``Decimal(10, 2)`` column.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    customer_id: int
    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def validate_items(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        if sum((item.subtotal for item in v), Decimal("0")) > MAX_AMOUNT:
            raise ValueError(f"Order total must not exceed {MAX_AMOUNT}.")
        return v


class UpdateOrderStatusDTO(BaseModel):
    """Target status of ``PATCH /api/orders/{id}/status`` (case-insensitive)."""

    model_config = ConfigDict(frozen=True)

    status: OrderStatusEnum

    @field_validator("status", mode="before")
    @classmethod
    def normalise_case(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderItemOutputDTO(BaseModel):
    """Immutable DTO for order item API responses."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    @classmethod
    def from_entity(cls, item: OrderItem) -> OrderItemOutputDTO:
        return cls(
            id=item.id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        )


class OrderOutputDTO(BaseModel):
    """Immutable DTO for order API responses."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    customer_id: int
    customer_name: str
    items: List[OrderItemOutputDTO]
    total_amount: Decimal
    status: OrderStatusEnum
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Build an output DTO from an Order model instance.

        Assumes ``customer`` is selected and ``items`` prefetched.
        """
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer.name,
            items=[OrderItemOutputDTO.from_entity(item) for item in order.items.all()],
            total_amount=order.total_amount,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
