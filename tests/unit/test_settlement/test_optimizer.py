#!/usr/bin/env python3
"""Tests for the debt settlement optimizer."""

import logging
from decimal import Decimal

import pytest

from expense_splitter.core import config as config_module
from expense_splitter.core.errors import InvalidInputError, PreconditionViolatedError
from expense_splitter.core.models import DebtSettlement, NetBalance
from expense_splitter.settlement import apply_settlements, optimize_debts


def balances_from(**nets: str) -> list[NetBalance]:
    return [NetBalance.from_net(user_id, Decimal(net)) for user_id, net in nets.items()]


def as_tuples(settlements):
    return [(s.from_user_id, s.to_user_id, s.amount) for s in settlements]


class TestGreedyMatching:
    """Test largest-creditor greedy matching."""

    @pytest.mark.settlement
    def test_single_creditor(self):
        balances = balances_from(A="100.00", B="-60.00", C="-40.00")

        settlements = optimize_debts(balances)

        assert as_tuples(settlements) == [("B", "A", Decimal("60.00")), ("C", "A", Decimal("40.00"))]
        assert all(v == 0 for v in apply_settlements(balances, settlements).values())

    @pytest.mark.settlement
    def test_debtor_pays_largest_creditor_first(self):
        balances = balances_from(A="30.00", B="70.00", C="-100.00")

        settlements = optimize_debts(balances)

        assert as_tuples(settlements) == [("C", "B", Decimal("70.00")), ("C", "A", Decimal("30.00"))]

    @pytest.mark.settlement
    def test_largest_creditor_reevaluated_after_each_payment(self):
        balances = balances_from(A="50.00", B="40.00", C="-20.00", D="-70.00")

        settlements = optimize_debts(balances)

        # C pays A 20 (A left 30); D then pays B 40 (largest), then A 30
        assert as_tuples(settlements) == [
            ("C", "A", Decimal("20.00")),
            ("D", "B", Decimal("40.00")),
            ("D", "A", Decimal("30.00")),
        ]

    @pytest.mark.settlement
    def test_ties_go_to_first_creditor(self):
        balances = balances_from(A="50.00", B="50.00", C="-100.00")

        settlements = optimize_debts(balances)

        assert as_tuples(settlements) == [("C", "A", Decimal("50.00")), ("C", "B", Decimal("50.00"))]

    @pytest.mark.settlement
    def test_debtors_processed_in_input_order(self):
        balances = balances_from(X="-10.00", Y="-90.00", A="100.00")

        settlements = optimize_debts(balances)

        assert [s.from_user_id for s in settlements] == ["X", "Y"]

    @pytest.mark.settlement
    def test_transaction_bound_and_zero_sum(self):
        balances = balances_from(
            A="120.50", B="-33.17", C="17.25", D="-44.44", E="-60.14", F="0.00", G="0.01", H="-0.01"
        )

        settlements = optimize_debts(balances)

        non_zero = [b for b in balances if b.net_balance != 0]
        assert len(settlements) <= len(non_zero) - 1
        assert all(isinstance(s, DebtSettlement) and s.amount > 0 for s in settlements)
        assert all(v == 0 for v in apply_settlements(balances, settlements).values())

    @pytest.mark.settlement
    def test_all_even(self):
        assert optimize_debts(balances_from(A="0", B="0")) == []
        assert optimize_debts([]) == []

    @pytest.mark.settlement
    def test_duplicate_participants_rejected(self):
        balances = [NetBalance.from_net("A", Decimal("5")), NetBalance.from_net("A", Decimal("-5"))]
        with pytest.raises(InvalidInputError):
            optimize_debts(balances)


class TestZeroSumHandling:
    """Test lenient and strict handling of unbalanced input."""

    @pytest.mark.settlement
    def test_lenient_leaves_residual_and_warns(self, caplog):
        balances = balances_from(A="50.00", B="-80.00")

        with caplog.at_level(logging.WARNING, logger="expense_splitter.settlement.optimizer"):
            settlements = optimize_debts(balances, strict=False)

        assert as_tuples(settlements) == [("B", "A", Decimal("50.00"))]
        assert apply_settlements(balances, settlements)["B"] == Decimal("-30.00")
        assert "residual" in caplog.text

    @pytest.mark.settlement
    def test_strict_raises_before_settling(self):
        with pytest.raises(PreconditionViolatedError, match="not zero-sum"):
            optimize_debts(balances_from(A="50.00", B="-80.00"), strict=True)

    @pytest.mark.settlement
    def test_strict_accepts_balanced_input(self):
        settlements = optimize_debts(balances_from(A="10.00", B="-10.00"), strict=True)
        assert len(settlements) == 1

    @pytest.mark.settlement
    def test_default_is_lenient_regardless_of_configuration(self, monkeypatch):
        monkeypatch.setenv("SPLITTER_STRICT_SETTLEMENT", "true")

        assert len(optimize_debts(balances_from(A="1.00", B="-2.00"))) == 1

    @pytest.mark.settlement
    def test_does_not_load_configuration(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        settlements = optimize_debts(balances_from(A="100.00", B="-100.00"))

        assert as_tuples(settlements) == [("B", "A", Decimal("100.00"))]
        assert config_module._config is None
