"""Order repository interface.

Extends ``IRepository[Order]`` with methods required by the Order
aggregate: atomic creation with items and the customer/status look-ups.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations must
    be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``customer_id`` and ``items`` (list of dicts
        with ``product_name``, ``quantity``, ``unit_price``); ``status``
        is optional.
        """

    @abstractmethod
    def list_by_customer(self, customer_id: int) -> "models.QuerySet[Order]":
        """Orders placed by one customer."""

    @abstractmethod
    def list_by_status(self, status: str) -> "models.QuerySet[Order]":
        """Orders currently in ``status``."""
