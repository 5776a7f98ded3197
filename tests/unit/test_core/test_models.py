#!/usr/bin/env python3
"""Tests for core domain models."""

from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

import pytest

from expense_splitter.core.errors import InvalidInputError, UnsupportedSplitTypeError
from expense_splitter.core.models import DebtSettlement, Expense, ExpenseShare, NetBalance, SplitType


class TestSplitType:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("EQUAL", SplitType.EQUAL),
            ("percentage", SplitType.PERCENTAGE),
            ("fixed", SplitType.CUSTOM),
            ("Custom", SplitType.CUSTOM),
            ("shares", SplitType.BY_SHARES),
            ("by-shares", SplitType.BY_SHARES),
            (SplitType.EQUAL, SplitType.EQUAL),
        ],
    )
    def test_parse(self, value, expected):
        assert SplitType.parse(value) is expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["itemized", "", 3])
    def test_parse_unknown(self, value):
        with pytest.raises(UnsupportedSplitTypeError):
            SplitType.parse(value)


class TestExpenseShare:
    """Test share validation and payment toggling."""

    @pytest.mark.unit
    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidInputError):
            ExpenseShare(1, "alice", Decimal("-0.01"), Decimal("0"))

    @pytest.mark.unit
    def test_percentage_out_of_range_rejected(self):
        with pytest.raises(InvalidInputError):
            ExpenseShare(1, "alice", Decimal("1.00"), Decimal("100.01"))

    @pytest.mark.unit
    def test_mark_paid_and_unpaid(self):
        share = ExpenseShare(1, "alice", Decimal("10.00"), Decimal("50.00"))
        paid_at = datetime(2024, 8, 15, 12, 0)

        paid = share.mark_paid(paid_at)
        assert paid.is_paid
        assert paid.paid_at == paid_at
        assert not paid.is_owed_money
        assert not share.is_paid  # original untouched

        unpaid = paid.mark_unpaid()
        assert not unpaid.is_paid
        assert unpaid.paid_at is None
        assert unpaid.is_owed_money

    @pytest.mark.unit
    def test_frozen(self):
        share = ExpenseShare(1, "alice", Decimal("10.00"), Decimal("50.00"))
        with pytest.raises(FrozenInstanceError):
            share.is_paid = True  # type: ignore[misc]

    @pytest.mark.unit
    def test_dict_conversion(self):
        share = ExpenseShare(7, "bob", Decimal("33.3"), Decimal("33.30"))
        data = share.to_dict()

        assert data["share_amount"] == "33.30"
        assert data["is_paid"] is False
        assert ExpenseShare.from_dict(data) == share


class TestExpense:
    @pytest.mark.unit
    def test_required_validation(self):
        with pytest.raises(InvalidInputError):
            Expense(id=1, group_id=1, paid_by_user_id="alice", description=" ", amount=Decimal("1.00"))
        with pytest.raises(InvalidInputError):
            Expense(id=1, group_id=1, paid_by_user_id="alice", description="Lunch", amount=Decimal("-1.00"))
        with pytest.raises(InvalidInputError):
            Expense(
                id=1, group_id=1, paid_by_user_id="alice", description="Lunch", amount=Decimal("1.00"), currency="US"
            )

    @pytest.mark.unit
    def test_from_dict_defaults(self):
        expense = Expense.from_dict({"id": 3, "paid_by_user_id": "carol", "amount": "45.99"})

        assert expense.amount == Decimal("45.99")
        assert expense.description == "Expense"
        assert expense.currency == "USD"
        assert expense.split_type is SplitType.EQUAL
        assert expense.group_id is None

    @pytest.mark.unit
    def test_string_expense_and_group_ids(self):
        expense = Expense.from_dict(
            {"id": "exp-9", "group_id": "ski-trip", "paid_by_user_id": "carol", "amount": "45.00"}
        )
        share = ExpenseShare(expense.id, "dave", Decimal("15.00"), Decimal("33.33"))

        assert expense.to_dict()["id"] == "exp-9"
        assert expense.to_dict()["group_id"] == "ski-trip"
        assert ExpenseShare.from_dict(share.to_dict()).expense_id == "exp-9"


class TestNetBalance:
    @pytest.mark.unit
    def test_from_net(self):
        creditor = NetBalance.from_net("alice", Decimal("100.00"))
        debtor = NetBalance.from_net("bob", Decimal("-60.00"))

        assert creditor.is_creditor and creditor.total_paid == Decimal("100.00")
        assert debtor.is_debtor and debtor.total_owed == Decimal("60.00")
        assert NetBalance.from_net("carol", Decimal("0")).is_even

    @pytest.mark.unit
    def test_from_dict_net_only(self):
        balance = NetBalance.from_dict({"user_id": "bob", "net_balance": "-41.83"})
        assert balance.net_balance == Decimal("-41.83")
        assert balance.total_owed == Decimal("41.83")


class TestDebtSettlement:
    @pytest.mark.unit
    def test_amount_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            DebtSettlement("bob", "alice", Decimal("0"))

    @pytest.mark.unit
    def test_str(self):
        assert str(DebtSettlement("bob", "alice", Decimal("60"))) == "bob -> alice: $60.00"
