"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email must be unique (checked before the document number).
- Document number must be unique.
- On update, a collision only counts when it belongs to another customer.
- A customer referenced by orders cannot be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import IntegrityError, models, transaction

from modules.customers.dtos import CustomerOutputDTO
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerHasOrders,
    CustomerNotFound,
)
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerInputDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CustomerInputDTO) -> CustomerOutputDTO:
        """Create a new customer after enforcing uniqueness rules.

        Raises:
            CustomerAlreadyExists: if the email or document number is taken.
        """
        self._validate_unique_constraints(dto.email, dto.document_number)

        customer = Customer(
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
            document_number=dto.document_number,
        )
        customer = self._save(customer)
        logger.info("customer.created", customer_id=customer.id)
        return CustomerOutputDTO.from_entity(customer)

    @transaction.atomic
    def update_customer(self, id: int, dto: CustomerInputDTO) -> CustomerOutputDTO:
        """Overwrite every mutable field of an existing customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new email or document number
                belongs to another customer.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(id)

        self._validate_unique_constraints(
            dto.email, dto.document_number, exclude_id=customer.id
        )

        customer.name = dto.name
        customer.email = dto.email
        customer.phone = dto.phone
        customer.document_number = dto.document_number

        customer = self._save(customer)
        logger.info("customer.updated", customer_id=customer.id)
        return CustomerOutputDTO.from_entity(customer)

    @transaction.atomic
    def delete_customer(self, id: int) -> None:
        """Delete a customer that no order references.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerHasOrders: if orders still reference the customer.
        """
        if not self._repo.exists(id):
            raise CustomerNotFound(id)
        if self._repo.has_orders(id):
            logger.warning("customer.delete_blocked", customer_id=id)
            raise CustomerHasOrders(
                f"Customer {id} has orders and cannot be deleted."
            )
        self._repo.delete(id)
        logger.info("customer.deleted", customer_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_customer(self, id: int) -> CustomerOutputDTO:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(id)
        return CustomerOutputDTO.from_entity(customer)

    def list_customers(self) -> "models.QuerySet[Customer]":
        """All customers, unevaluated so the caller can sort and page them."""
        return self._repo.list()

    def search_customers(self, name: str) -> "models.QuerySet[Customer]":
        """Case-insensitive substring search on the customer name.

        An empty ``name`` matches every customer.
        """
        return self._repo.search_by_name(name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_unique_constraints(
        self, email: str, document_number: str, exclude_id: Optional[int] = None
    ) -> None:
        existing = self._repo.get_by_email(email)
        if existing and existing.id != exclude_id:
            logger.warning("customer.duplicate_email", customer_id=exclude_id)
            raise CustomerAlreadyExists("Email already in use.")

        existing = self._repo.get_by_document_number(document_number)
        if existing and existing.id != exclude_id:
            logger.warning(
                "customer.duplicate_document_number",
                document_number=document_number,
            )
            raise CustomerAlreadyExists("Document number already in use.")

    def _save(self, customer: Customer) -> Customer:
        # The unique indexes are authoritative when two writers race past
        # the pre-check above.
        try:
            return self._repo.save(customer)
        except IntegrityError as exc:
            logger.warning("customer.unique_violation", error=str(exc))
            raise CustomerAlreadyExists(
                "Email or document number already in use."
            ) from exc
