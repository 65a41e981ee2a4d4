"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderItems) is persisted atomically.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @staticmethod
    def _queryset() -> "models.QuerySet[Order]":
        """Base queryset with the customer joined and items prefetched (no N+1)."""
        return Order.objects.select_related("customer").prefetch_related("items")

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` keys:
        - ``customer_id`` (required)
        - ``items`` (required): list of dicts with ``product_name``,
          ``quantity``, ``unit_price``
        - ``status`` (optional, defaults to ``CREATED``)
        """
        order = Order(
            customer_id=data["customer_id"],
            status=data.get("status") or OrderStatus.CREATED,
        )
        order.save()

        items = data.get("items", [])
        for item_data in items:
            order.add_item(
                product_name=item_data["product_name"],
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
            )

        # Queryset update: a new order keeps created_at == updated_at.
        order.recalculate_total()
        Order.objects.filter(pk=order.pk).update(total_amount=order.total_amount)

        logger.info(
            "order.persisted",
            order_id=order.id,
            item_count=len(items),
            total_amount=str(order.total_amount),
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        return self._queryset().filter(id=id).first()

    def exists(self, id: int) -> bool:
        return Order.objects.filter(id=id).exists()

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders with optional filters and eager-loaded relations.

        Supported filter keys include ``status`` and ``customer_id``.
        """
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_by_customer(self, customer_id: int) -> "models.QuerySet[Order]":
        return self.list({"customer_id": customer_id})

    def list_by_status(self, status: str) -> "models.QuerySet[Order]":
        return self.list({"status": status})

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info("order.saved", order_id=entity.id, status=entity.status)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Hard-delete an order; its items go with it (CASCADE)."""
        deleted, per_model = Order.objects.filter(id=id).delete()
        if deleted:
            logger.info(
                "order.deleted",
                order_id=id,
                item_count=per_model.get("orders.OrderItem", 0),
            )
        return bool(deleted)
