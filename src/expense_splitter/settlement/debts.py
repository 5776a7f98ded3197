#!/usr/bin/env python3
"""
Per-user debt map: who owes whom, summed over unpaid shares.
"""

from collections.abc import Iterable
from decimal import Decimal

from ..core.models import Expense, ExpenseShare, GroupId, ParticipantId


def calculate_user_debts(
    group_id: GroupId | None,
    shares: Iterable[ExpenseShare],
    expenses: Iterable[Expense],
) -> dict[ParticipantId, dict[ParticipantId, Decimal]]:
    """
    Calculate what each user owes to each other user in a group.

    Every unpaid share adds its amount to ``debts[share owner][expense payer]``.
    Shares owned by the payer, shares of other groups' expenses and shares
    whose expense is unknown are skipped.

    Args:
        group_id: Group to restrict to
        shares: Candidate shares
        expenses: Expenses the shares refer to

    Returns:
        Nested mapping debtor -> creditor -> amount
    """
    group_expenses = {expense.id: expense for expense in expenses if expense.group_id == group_id}

    user_debts: dict[ParticipantId, dict[ParticipantId, Decimal]] = {}
    for share in shares:
        if share.is_paid:
            continue

        expense = group_expenses.get(share.expense_id)
        if expense is None:
            continue

        ower_id = share.user_id
        payer_id = expense.paid_by_user_id
        if ower_id == payer_id:
            continue

        owed = user_debts.setdefault(ower_id, {})
        owed[payer_id] = owed.get(payer_id, Decimal("0.00")) + share.share_amount

    return user_debts
