"""Tests for CustomerDjangoRepository against the test database."""

from __future__ import annotations

import pytest

from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return CustomerDjangoRepository()


class TestLookups:
    def test_get_by_id(self, repo, customer):
        assert repo.get_by_id(customer.id) == customer
        assert repo.get_by_id(999_999) is None

    def test_exists(self, repo, customer):
        assert repo.exists(customer.id) is True
        assert repo.exists(999_999) is False

    def test_get_by_email_and_document(self, repo, customer):
        assert repo.get_by_email("john@example.com") == customer
        assert repo.get_by_document_number("12345678900") == customer
        assert repo.get_by_email("nobody@example.com") is None


class TestSearchByName:
    def test_case_insensitive_substring(self, repo, make_customer):
        make_customer(name="John Doe")
        make_customer(name="Jane Doe")
        make_customer(name="Alice Smith")

        assert repo.search_by_name("doe").count() == 2
        assert [c.name for c in repo.search_by_name("JOHN")] == ["John Doe"]
        assert repo.search_by_name("zzz").count() == 0

    def test_empty_name_matches_everyone(self, repo, make_customer):
        make_customer(name="John Doe")
        make_customer(name="Alice Smith")

        assert repo.search_by_name("").count() == 2


class TestSaveAndDelete:
    def test_save_new(self, repo):
        customer = repo.save(
            Customer(name="New", email="new@example.com", document_number="N1")
        )
        assert customer.id is not None
        assert Customer.objects.filter(id=customer.id).exists()

    def test_delete(self, repo, customer):
        assert repo.delete(customer.id) is True
        assert repo.delete(customer.id) is False
        assert not Customer.objects.filter(id=customer.id).exists()


class TestHasOrders:
    def test_without_orders(self, repo, customer):
        assert repo.has_orders(customer.id) is False

    def test_with_orders(self, repo, customer, make_order):
        make_order(customer)
        assert repo.has_orders(customer.id) is True
