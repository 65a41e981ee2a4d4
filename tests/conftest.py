from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.orders.repositories.django_repository import OrderDjangoRepository


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_customer():
    """Factory persisting a Customer; fields default to unique values."""
    counter = {"n": 0}

    def _make(**overrides) -> Customer:
        counter["n"] += 1
        n = counter["n"]
        defaults = {
            "name": f"Customer {n}",
            "email": f"customer{n}@example.com",
            "phone": "555-0100",
            "document_number": f"DOC-{n:05d}",
        }
        defaults.update(overrides)
        customer = Customer(**defaults)
        customer.save()
        return customer

    return _make


@pytest.fixture()
def customer(make_customer):
    return make_customer(
        name="John Doe",
        email="john@example.com",
        phone="555-1234",
        document_number="12345678900",
    )


@pytest.fixture()
def make_order():
    """Factory persisting an Order with items through the repository."""
    repo = OrderDjangoRepository()

    def _make(customer, items=None, status=None):
        if items is None:
            items = [
                {
                    "product_name": "Keyboard",
                    "quantity": 2,
                    "unit_price": Decimal("50.00"),
                },
                {
                    "product_name": "Monitor",
                    "quantity": 1,
                    "unit_price": Decimal("150.00"),
                },
            ]
        order = repo.create(
            {"customer_id": customer.id, "items": items, "status": status}
        )
        return repo.get_by_id(order.id)

    return _make
