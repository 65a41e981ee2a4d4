"""Unit tests for CustomerService.

Covers:
- create_customer: happy path, duplicate email, duplicate document number,
  unique-index race.
- update_customer: happy path, not found, collisions with self vs. others.
- get_customer: happy path, not found.
- delete_customer: happy path, not found, customer with orders.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.customers.dtos import CustomerInputDTO
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerHasOrders,
    CustomerNotFound,
)
from modules.customers.models import Customer
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return CustomerService(repository=mock_repo)


def _make_customer(**overrides) -> Customer:
    defaults = {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "555-1234",
        "document_number": "12345678900",
    }
    defaults.update(overrides)
    customer = Customer(**defaults)
    customer.save()
    return customer


def _dto(**overrides) -> CustomerInputDTO:
    data = {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "555-1234",
        "document_number": "12345678900",
    }
    data.update(overrides)
    return CustomerInputDTO(**data)


def _persist(customer: Customer) -> Customer:
    customer.save()
    return customer


# ===========================================================================
# create_customer
# ===========================================================================


class TestCreateCustomer:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_email.return_value = None
        mock_repo.get_by_document_number.return_value = None
        mock_repo.save.side_effect = _persist

        customer = service.create_customer(_dto())

        assert customer.id is not None
        assert customer.name == "John Doe"
        assert customer.document_number == "12345678900"
        assert customer.created_at == customer.updated_at
        mock_repo.save.assert_called_once()

    def test_duplicate_email_raises(self, service, mock_repo):
        mock_repo.get_by_email.return_value = _make_customer()

        with pytest.raises(CustomerAlreadyExists, match="Email already in use"):
            service.create_customer(_dto(document_number="99999999999"))

        mock_repo.save.assert_not_called()

    def test_duplicate_document_number_raises(self, service, mock_repo):
        mock_repo.get_by_email.return_value = None
        mock_repo.get_by_document_number.return_value = _make_customer()

        with pytest.raises(CustomerAlreadyExists, match="Document number"):
            service.create_customer(_dto(email="other@example.com"))

        mock_repo.save.assert_not_called()

    def test_email_checked_before_document(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_email.return_value = existing
        mock_repo.get_by_document_number.return_value = existing

        with pytest.raises(CustomerAlreadyExists, match="Email"):
            service.create_customer(_dto())

        mock_repo.get_by_document_number.assert_not_called()

    def test_integrity_error_translated(self, service, mock_repo):
        mock_repo.get_by_email.return_value = None
        mock_repo.get_by_document_number.return_value = None
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        with pytest.raises(CustomerAlreadyExists):
            service.create_customer(_dto())


# ===========================================================================
# update_customer
# ===========================================================================


class TestUpdateCustomer:
    def test_success(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing
        mock_repo.get_by_email.return_value = existing
        mock_repo.get_by_document_number.return_value = existing
        mock_repo.save.side_effect = _persist

        customer = service.update_customer(
            existing.id, _dto(name="John Updated", phone="")
        )

        assert customer.id == existing.id
        assert customer.name == "John Updated"
        assert customer.phone == ""
        assert customer.created_at == existing.created_at

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound, match="Customer not found with id: 999"):
            service.update_customer(999, _dto())

    def test_email_owned_by_other_customer(self, service, mock_repo):
        target = _make_customer()
        other = _make_customer(email="jane@example.com", document_number="222")
        mock_repo.get_by_id.return_value = target
        mock_repo.get_by_email.return_value = other

        with pytest.raises(CustomerAlreadyExists, match="Email"):
            service.update_customer(target.id, _dto(email="jane@example.com"))

    def test_document_owned_by_other_customer(self, service, mock_repo):
        target = _make_customer()
        other = _make_customer(email="jane@example.com", document_number="222")
        mock_repo.get_by_id.return_value = target
        mock_repo.get_by_email.return_value = None
        mock_repo.get_by_document_number.return_value = other

        with pytest.raises(CustomerAlreadyExists, match="Document number"):
            service.update_customer(target.id, _dto(document_number="222"))


# ===========================================================================
# get_customer
# ===========================================================================


class TestGetCustomer:
    def test_success(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing

        customer = service.get_customer(existing.id)

        assert customer.email == "john@example.com"

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.get_customer(999)


# ===========================================================================
# delete_customer
# ===========================================================================


class TestDeleteCustomer:
    def test_success(self, service, mock_repo):
        mock_repo.exists.return_value = True
        mock_repo.has_orders.return_value = False

        service.delete_customer(1)

        mock_repo.delete.assert_called_once_with(1)

    def test_not_found(self, service, mock_repo):
        mock_repo.exists.return_value = False

        with pytest.raises(CustomerNotFound):
            service.delete_customer(999)

        mock_repo.delete.assert_not_called()

    def test_customer_with_orders_cannot_be_deleted(self, service, mock_repo):
        mock_repo.exists.return_value = True
        mock_repo.has_orders.return_value = True

        with pytest.raises(CustomerHasOrders):
            service.delete_customer(1)

        mock_repo.delete.assert_not_called()
