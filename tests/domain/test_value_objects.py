"""Unit tests for value objects and coercion helpers."""

from decimal import Decimal

import pytest

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.value_objects import (
    InventoryItemSpec,
    Quantity,
    parse_unit_cost,
    to_decimal,
    to_int,
)


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)  # type: ignore[arg-type]


class TestQuantityCoerce:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (3, 3),
            ("4", 4),
            (2.9, 2),
            (0, 1),
            (-5, 1),
            (None, 1),
            ("abc", 1),
            (float("nan"), 1),
            (float("inf"), 1),
        ],
    )
    def test_coerce(self, raw, expected):
        assert Quantity.coerce(raw).value == expected

    def test_item_spec_requested(self):
        assert InventoryItemSpec("P-1", quantity="7").requested.value == 7
        assert InventoryItemSpec("P-1", quantity=0).requested.value == 1


class TestStoredValueHelpers:

    def test_to_int_falls_back(self):
        assert to_int("12") == 12
        assert to_int(None) == 0
        assert to_int("x", default=3) == 3

    def test_to_decimal_falls_back(self):
        assert to_decimal("1.25") == Decimal("1.25")
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("nope") == Decimal("0")


class TestParseUnitCost:

    def test_strips_currency_formatting(self):
        assert parse_unit_cost("$1,250.50") == Decimal("1250.50")

    def test_plain_number(self):
        assert parse_unit_cost(12) == Decimal("12")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            parse_unit_cost("-1")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid unit cost"):
            parse_unit_cost("free")
