"""Order service layer (Use Cases).

Orchestrates the business logic for order creation, look-ups and status
management.  All write operations are atomic; the service defines the
unit-of-work boundary.

Business rules enforced:
- The referenced customer must exist.
- Item subtotals and the order total use exact Decimal arithmetic.
- Status transitions validated against the state machine: a COMPLETED
  order is frozen, and CREATED cannot jump straight to COMPLETED.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import models, transaction

from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderOutputDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InvalidOrderStatus,
    OrderNotFound,
)

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> OrderOutputDTO:
        """Create a new order in status CREATED with its line items.

        Raises:
            CustomerNotFound: customer does not exist.
        """
        log = logger.bind(customer_id=dto.customer_id)
        log.info("order.creation_started", item_count=len(dto.items))

        if not self._customer_repo.exists(dto.customer_id):
            raise CustomerNotFound(dto.customer_id)

        order = self._order_repo.create(
            {
                "customer_id": dto.customer_id,
                "status": OrderStatus.CREATED,
                "items": [
                    {
                        "product_name": item.product_name,
                        "quantity": item.quantity,
                        "unit_price": item.unit_price,
                    }
                    for item in dto.items
                ],
            }
        )
        log.info(
            "order.created", order_id=order.id, total_amount=str(order.total_amount)
        )

        # Re-fetch with relations so amounts come back normalised from storage.
        return OrderOutputDTO.from_entity(self._get_or_raise(order.id))

    @transaction.atomic
    def update_status(self, order_id: int, new_status: str) -> OrderOutputDTO:
        """Transition an order to a new status.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: transition is not allowed.
        """
        order = self._get_or_raise(order_id)
        log = logger.bind(
            order_id=order_id,
            current_status=order.status,
            new_status=new_status,
        )

        self._validate_transition(order, new_status)

        order.status = new_status
        self._order_repo.save(order)
        log.info("order.status_updated")
        return OrderOutputDTO.from_entity(order)

    @transaction.atomic
    def delete_order(self, order_id: int) -> None:
        """Delete an order together with its items.

        Raises:
            OrderNotFound: order does not exist.
        """
        if not self._order_repo.exists(order_id):
            raise OrderNotFound(order_id)
        self._order_repo.delete(order_id)
        logger.info("order.deleted", order_id=order_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> OrderOutputDTO:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        return OrderOutputDTO.from_entity(self._get_or_raise(order_id))

    def list_orders(self) -> "models.QuerySet[Order]":
        return self._order_repo.list()

    def list_orders_by_customer(self, customer_id: int) -> "models.QuerySet[Order]":
        """Orders of one customer; an unknown customer yields an empty page."""
        return self._order_repo.list_by_customer(customer_id)

    def list_orders_by_status(self, status: str) -> "models.QuerySet[Order]":
        return self._order_repo.list_by_status(status)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    @staticmethod
    def _validate_transition(order: Order, new_status: str) -> None:
        if order.is_terminal:
            logger.warning("order.invalid_transition", order_id=order.id)
            raise InvalidOrderStatus("Cannot change status of a completed order.")
        if not order.can_transition_to(new_status):
            logger.warning("order.invalid_transition", order_id=order.id)
            raise InvalidOrderStatus(
                f"Order must pass through {OrderStatus.PROCESSING} "
                f"before {new_status}."
            )
