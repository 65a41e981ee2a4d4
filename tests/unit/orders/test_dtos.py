"""Unit tests for Order DTOs (Pydantic v2)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.orders.dtos import (
    CreateOrderDTO,
    CreateOrderItemDTO,
    OrderOutputDTO,
    OrderStatusEnum,
    UpdateOrderStatusDTO,
)

pytestmark = pytest.mark.unit


ITEM = {"productName": "Keyboard", "quantity": 2, "unitPrice": "50.00"}


class TestCreateOrderItemDTO:
    def test_parses_camel_case(self):
        dto = CreateOrderItemDTO.model_validate(ITEM)
        assert dto.product_name == "Keyboard"
        assert dto.unit_price == Decimal("50.00")

    def test_zero_price_allowed(self):
        dto = CreateOrderItemDTO.model_validate({**ITEM, "unitPrice": "0"})
        assert dto.unit_price == Decimal("0")

    @pytest.mark.parametrize(
        "override",
        [
            {"quantity": 0},
            {"quantity": -1},
            {"unitPrice": "-0.01"},
            {"unitPrice": "1.234"},
            {"productName": "  "},
            {"productName": "x" * 201},
            {"quantity": 2147483648},
        ],
    )
    def test_invalid_values_rejected(self, override):
        with pytest.raises(ValidationError):
            CreateOrderItemDTO.model_validate({**ITEM, **override})


class TestAmountBounds:
    def test_subtotal_above_column_capacity_rejected(self):
        with pytest.raises(ValidationError, match="subtotal must not exceed"):
            CreateOrderItemDTO.model_validate(
                {"productName": "Bulk", "quantity": 1000000, "unitPrice": "99999999.99"}
            )

    def test_subtotal_at_capacity_accepted(self):
        dto = CreateOrderItemDTO.model_validate(
            {"productName": "Bulk", "quantity": 1, "unitPrice": "99999999.99"}
        )
        assert dto.subtotal == Decimal("99999999.99")

    def test_order_total_above_column_capacity_rejected(self):
        item = {"productName": "Big", "quantity": 1, "unitPrice": "60000000.00"}
        with pytest.raises(ValidationError) as exc_info:
            CreateOrderDTO.model_validate({"customerId": 1, "items": [item, item]})
        assert exc_info.value.errors()[0]["loc"] == ("items",)


class TestCreateOrderDTO:
    def test_valid(self):
        dto = CreateOrderDTO.model_validate({"customerId": 1, "items": [ITEM]})
        assert dto.customer_id == 1
        assert len(dto.items) == 1

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            CreateOrderDTO.model_validate({"customerId": 1, "items": []})

    def test_missing_customer_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateOrderDTO.model_validate({"items": [ITEM]})
        assert exc_info.value.errors()[0]["loc"] == ("customerId",)

    def test_nested_item_error_location(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateOrderDTO.model_validate(
                {"customerId": 1, "items": [{**ITEM, "quantity": 0}]}
            )
        assert exc_info.value.errors()[0]["loc"] == ("items", 0, "quantity")


class TestUpdateOrderStatusDTO:
    @pytest.mark.parametrize("raw", ["PROCESSING", "processing", " Processing "])
    def test_case_insensitive(self, raw):
        dto = UpdateOrderStatusDTO.model_validate({"status": raw})
        assert dto.status is OrderStatusEnum.PROCESSING

    @pytest.mark.parametrize("raw", ["SHIPPED", "", None])
    def test_invalid_rejected(self, raw):
        with pytest.raises(ValidationError):
            UpdateOrderStatusDTO.model_validate({"status": raw})


class TestOrderOutputDTO:
    def test_from_entity(self, make_order, customer):
        order = make_order(customer)
        body = OrderOutputDTO.from_entity(order).model_dump(mode="json", by_alias=True)

        assert body["customerId"] == customer.id
        assert body["customerName"] == "John Doe"
        assert body["status"] == "CREATED"
        assert body["totalAmount"] == "250.00"
        assert [item["subtotal"] for item in body["items"]] == ["100.00", "150.00"]
        assert body["items"][0]["productName"] == "Keyboard"
        assert body["createdAt"] == body["updatedAt"]
