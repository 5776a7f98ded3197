#!/usr/bin/env python3
"""
Balance Aggregator.

Folds a group's expenses and shares into net balances: amount paid minus
amount still owed on unsettled shares. Balances are always derived, never
stored.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from ..core.currency import ZERO, sum_amounts
from ..core.models import Expense, ExpenseShare, NetBalance, ParticipantId


def compute_balance(
    user_id: ParticipantId,
    expenses: Iterable[Expense],
    shares: Iterable[ExpenseShare],
) -> NetBalance:
    """
    Compute one participant's net balance.

    Args:
        user_id: Participant to compute for
        expenses: Expenses to consider (the payer's full amount counts)
        shares: Shares to consider (only unpaid shares count as owed)

    Returns:
        NetBalance; all zero when the participant appears nowhere
    """
    total_owed = sum_amounts(share.share_amount for share in shares if share.user_id == user_id and not share.is_paid)
    total_paid = sum_amounts(expense.amount for expense in expenses if expense.paid_by_user_id == user_id)

    return NetBalance(
        user_id=user_id,
        total_owed=total_owed,
        total_paid=total_paid,
        net_balance=total_paid - total_owed,
    )


def compute_group_balances(
    expenses: Sequence[Expense],
    shares: Sequence[ExpenseShare],
    user_ids: Sequence[ParticipantId] | None = None,
) -> list[NetBalance]:
    """
    Compute net balances for every participant of a group.

    Without explicit ``user_ids``, participants are taken in order of first
    appearance: payers first, then share owners.
    """
    if user_ids is None:
        seen: dict[ParticipantId, None] = {}
        for expense in expenses:
            seen.setdefault(expense.paid_by_user_id, None)
        for share in shares:
            seen.setdefault(share.user_id, None)
        user_ids = list(seen)

    return [compute_balance(user_id, expenses, shares) for user_id in user_ids]


def total_net(balances: Iterable[NetBalance]) -> tuple[Decimal, Decimal]:
    """Return (sum of credits, sum of debts) as positive magnitudes."""
    credits = ZERO
    debts = ZERO
    for balance in balances:
        if balance.net_balance > 0:
            credits += balance.net_balance
        elif balance.net_balance < 0:
            debts -= balance.net_balance
    return credits, debts
