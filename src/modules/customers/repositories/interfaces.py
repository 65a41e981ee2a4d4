"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups required by the
uniqueness rules (email, document number), the name search and the
delete guard.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address."""

    @abstractmethod
    def get_by_document_number(self, document_number: str) -> Optional[Customer]:
        """Retrieve a customer by document number."""

    @abstractmethod
    def search_by_name(self, name: str) -> "models.QuerySet[Customer]":
        """Case-insensitive substring match on the customer name."""

    @abstractmethod
    def has_orders(self, id: int) -> bool:
        """Return ``True`` if any order references the customer."""
