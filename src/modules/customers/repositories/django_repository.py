"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions. The Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        return Customer.objects.filter(id=id).first()

    def exists(self, id: int) -> bool:
        return Customer.objects.filter(id=id).exists()

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"email__iexact": "john@example.com"}
            {"name__icontains": "doe"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer.

        Runs in its own savepoint so a unique-index ``IntegrityError`` leaves
        the caller's transaction usable.
        """
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        deleted, _ = Customer.objects.filter(id=id).delete()
        if deleted:
            logger.info("customer.deleted", customer_id=id)
        return bool(deleted)

    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email=email).first()

    def get_by_document_number(self, document_number: str) -> Optional[Customer]:
        return Customer.objects.filter(document_number=document_number).first()

    def search_by_name(self, name: str) -> "models.QuerySet[Customer]":
        return self.list({"name__icontains": name})

    def has_orders(self, id: int) -> bool:
        return Customer.objects.filter(id=id, orders__isnull=False).exists()
