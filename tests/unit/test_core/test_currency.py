#!/usr/bin/env python3
"""Tests for decimal ledger primitives."""

from decimal import Decimal

import pytest

from expense_splitter.core.currency import (
    allocate_remainder,
    calculate_percentage,
    format_amount,
    parse_amount,
    proportional_amount,
    round_amount,
    sum_amounts,
    validate_sum_equals_total,
)
from expense_splitter.core.errors import InvalidInputError


class TestRounding:
    """Test round-half-up at currency scale."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("33.335", "33.34"),
            ("33.334", "33.33"),
            ("0.005", "0.01"),
            ("-0.005", "-0.01"),
            ("12", "12.00"),
        ],
    )
    def test_round_half_up(self, value, expected):
        assert round_amount(Decimal(value)) == Decimal(expected)
        assert str(round_amount(Decimal(value))) == expected

    @pytest.mark.currency
    def test_proportional_amount(self):
        """Test total * weight / total_weight rounding."""
        assert proportional_amount(Decimal("100.00"), Decimal("1"), Decimal("3")) == Decimal("33.33")
        assert proportional_amount(Decimal("100.00"), Decimal("2"), Decimal("3")) == Decimal("66.67")
        assert proportional_amount(Decimal("100.00"), Decimal("1"), Decimal("0")) == Decimal("0.00")

    @pytest.mark.currency
    def test_calculate_percentage(self):
        assert calculate_percentage(Decimal("33.33"), Decimal("100.00")) == Decimal("33.33")
        assert calculate_percentage(Decimal("1.00"), Decimal("3.00")) == Decimal("33.33")
        assert calculate_percentage(Decimal("5.00"), Decimal("0")) == Decimal("0.00")


class TestParseAmount:
    """Test parsing of amounts and weights."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("$12.34", Decimal("12.34")),
            ("1,234.50", Decimal("1234.50")),
            ("-$5.00", Decimal("-5.00")),
            (12, Decimal("12")),
            (Decimal("0.125"), Decimal("0.125")),
        ],
    )
    def test_valid_amounts(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.currency
    @pytest.mark.parametrize("value", [12.5, True, "", "abc", "NaN", None])
    def test_invalid_amounts(self, value):
        """Floats, booleans and junk are rejected rather than guessed."""
        with pytest.raises(InvalidInputError):
            parse_amount(value)


class TestRemainderAllocation:
    """Test remainder-to-last allocation."""

    @pytest.mark.currency
    def test_last_item_absorbs_remainder(self):
        amounts = [Decimal("33.33")] * 3
        result = allocate_remainder(amounts, Decimal("100.00"))

        assert result == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
        assert amounts[-1] == Decimal("33.33")  # input not mutated

    @pytest.mark.currency
    def test_empty_list(self):
        assert allocate_remainder([], Decimal("10.00")) == []

    @pytest.mark.currency
    def test_sum_validation(self):
        amounts = [Decimal("25.00"), Decimal("24.99")]
        assert not validate_sum_equals_total(amounts, Decimal("50.00"))
        assert validate_sum_equals_total(amounts, Decimal("50.00"), tolerance=Decimal("0.01"))
        assert sum_amounts(amounts) == Decimal("49.99")


class TestFormatting:
    @pytest.mark.currency
    def test_format_amount(self):
        assert format_amount(Decimal("12.5")) == "$12.50"
        assert format_amount(Decimal("-41.83")) == "-$41.83"
        assert format_amount(Decimal("0")) == "$0.00"
