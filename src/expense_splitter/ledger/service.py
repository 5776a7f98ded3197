#!/usr/bin/env python3
"""
In-Memory Expense Ledger

Reference caller for the splitting and settlement engine. Holds expenses and
their shares in memory and keeps them consistent across create, update,
delete and payment toggles.

Lifecycle rules:
- Shares are created atomically with their expense; a failed split stores nothing
- Changing amount, split type or participants recomputes every share
- Deleting an expense deletes its shares
- An expense is settled exactly when all of its shares are paid
"""

import itertools
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from ..core.config import get_config
from ..core.currency import AmountLike, ZERO, parse_amount, sum_amounts
from ..core.errors import ExpenseNotFoundError, InvalidInputError, ShareNotFoundError
from ..core.models import DebtSettlement, Expense, ExpenseShare, GroupId, NetBalance, ParticipantId, SplitType
from ..settlement import calculate_user_debts, compute_balance, compute_group_balances, optimize_debts
from ..splitting import ParticipantInput, split_expense

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupExpenseStats:
    """Summary statistics for one group's expenses."""

    group_id: GroupId
    total_amount: Decimal
    total_expenses: int
    settled_expenses: int
    category_totals: dict[str, Decimal]

    @property
    def pending_expenses(self) -> int:
        return self.total_expenses - self.settled_expenses

    @property
    def settlement_percentage(self) -> Decimal:
        """Share of expenses fully settled, 0-100."""
        if self.total_expenses == 0:
            return ZERO
        return Decimal(self.settled_expenses) * 100 / Decimal(self.total_expenses)


def _freeze_input(participants: ParticipantInput) -> ParticipantInput:
    if isinstance(participants, Mapping):
        return dict(participants)
    return list(participants)


class InMemoryLedger:
    """
    Expense and share store that delegates all arithmetic to the engine.

    Read-modify-write cycles run under a reentrant lock so the engine always
    sees a consistent snapshot.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._ids = itertools.count(1)
        self._expenses: dict[int, Expense] = {}
        # Insertion order of the inner dict preserves split order
        self._shares: dict[int, dict[ParticipantId, ExpenseShare]] = {}
        self._inputs: dict[int, ParticipantInput] = {}

    # Expense lifecycle

    def create_expense(
        self,
        group_id: GroupId,
        paid_by_user_id: ParticipantId,
        description: str,
        amount: AmountLike,
        split_type: SplitType | str,
        participants: ParticipantInput,
        currency: str | None = None,
        category: str | None = None,
        notes: str | None = None,
    ) -> Expense:
        """
        Create an expense and split it among participants.

        Raises:
            InvalidInputError: If the expense or the split input is invalid
            UnsupportedSplitTypeError: If the split type is unknown
        """
        logger.info(f"Creating expense: {description} for group: {group_id}")
        split_config = get_config().split

        with self._lock:
            expense = Expense(
                id=next(self._ids),
                group_id=group_id,
                paid_by_user_id=paid_by_user_id,
                description=description,
                amount=parse_amount(amount),
                currency=currency or split_config.default_currency,
                category=category or split_config.default_category,
                split_type=SplitType.parse(split_type),
                notes=notes,
            )
            shares = split_expense(expense, participants)

            self._expenses[expense.id] = expense
            self._shares[expense.id] = {share.user_id: share for share in shares}
            self._inputs[expense.id] = _freeze_input(participants)

        logger.info(f"Expense created successfully: {expense.id}")
        return expense

    def update_expense(
        self,
        expense_id: int,
        *,
        description: str | None = None,
        amount: AmountLike | None = None,
        split_type: SplitType | str | None = None,
        participants: ParticipantInput | None = None,
        currency: str | None = None,
        category: str | None = None,
        notes: str | None = None,
    ) -> Expense:
        """
        Update an expense, recomputing its shares when the split changes.

        When only the amount changes the previous participant input is reused;
        switching to a weighted split type requires new participant input.
        Surviving participants keep their paid state.

        Raises:
            ExpenseNotFoundError: If the expense does not exist
            InvalidInputError: If the new split input is invalid
        """
        logger.info(f"Updating expense: {expense_id}")

        with self._lock:
            existing = self._get_expense(expense_id)
            new_type = SplitType.parse(split_type) if split_type is not None else existing.split_type

            updated = replace(
                existing,
                description=description if description is not None else existing.description,
                amount=parse_amount(amount) if amount is not None else existing.amount,
                split_type=new_type,
                currency=currency or existing.currency,
                category=category or existing.category,
                notes=notes if notes is not None else existing.notes,
            )

            resplit = (
                updated.amount != existing.amount
                or updated.split_type is not existing.split_type
                or participants is not None
            )
            if resplit:
                if participants is None:
                    participants = self._reusable_input(existing, new_type)
                old_shares = self._shares[expense_id]
                new_shares = {}
                for share in split_expense(updated, participants):
                    previous = old_shares.get(share.user_id)
                    if previous is not None and previous.is_paid:
                        share = share.mark_paid(previous.paid_at)
                    new_shares[share.user_id] = share

                self._shares[expense_id] = new_shares
                self._inputs[expense_id] = _freeze_input(participants)
                updated = replace(updated, is_settled=self._all_paid(expense_id))

            self._expenses[expense_id] = updated

        logger.info(f"Expense updated successfully: {expense_id}")
        return updated

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense and all of its shares."""
        logger.info(f"Deleting expense: {expense_id}")

        with self._lock:
            self._get_expense(expense_id)
            del self._shares[expense_id]
            del self._inputs[expense_id]
            del self._expenses[expense_id]

        logger.info(f"Expense deleted successfully: {expense_id}")

    # Payment status

    def mark_share_paid(self, expense_id: int, user_id: ParticipantId, paid_at: datetime | None = None) -> ExpenseShare:
        """Mark one share paid; settles the expense once every share is paid."""
        logger.info(f"Marking share as paid - Expense: {expense_id}, User: {user_id}")

        with self._lock:
            share = self._get_share(expense_id, user_id).mark_paid(paid_at)
            self._shares[expense_id][user_id] = share

            if self._all_paid(expense_id) and not self._expenses[expense_id].is_settled:
                self._expenses[expense_id] = replace(self._expenses[expense_id], is_settled=True)
                logger.info(f"Expense marked as settled: {expense_id}")

        return share

    def mark_share_unpaid(self, expense_id: int, user_id: ParticipantId) -> ExpenseShare:
        """Mark one share unpaid; the expense becomes unsettled."""
        logger.info(f"Marking share as unpaid - Expense: {expense_id}, User: {user_id}")

        with self._lock:
            share = self._get_share(expense_id, user_id).mark_unpaid()
            self._shares[expense_id][user_id] = share

            if self._expenses[expense_id].is_settled:
                self._expenses[expense_id] = replace(self._expenses[expense_id], is_settled=False)

        return share

    # Queries

    def get_expense(self, expense_id: int) -> Expense | None:
        return self._expenses.get(expense_id)

    def get_expenses_by_group(self, group_id: GroupId) -> list[Expense]:
        with self._lock:
            return [expense for expense in self._expenses.values() if expense.group_id == group_id]

    def get_expenses_by_user(self, user_id: ParticipantId) -> list[Expense]:
        """Expenses the user paid for or holds a share in."""
        with self._lock:
            return [
                expense
                for expense_id, expense in self._expenses.items()
                if expense.paid_by_user_id == user_id or user_id in self._shares[expense_id]
            ]

    def get_expense_shares(self, expense_id: int) -> list[ExpenseShare]:
        with self._lock:
            self._get_expense(expense_id)
            return list(self._shares[expense_id].values())

    def get_user_shares(self, user_id: ParticipantId) -> list[ExpenseShare]:
        with self._lock:
            return [shares[user_id] for shares in self._shares.values() if user_id in shares]

    def get_user_balance(self, user_id: ParticipantId, group_id: GroupId | None = None) -> NetBalance:
        """Net balance for one user, optionally restricted to a group."""
        with self._lock:
            expenses, shares = self._snapshot(group_id)
        return compute_balance(user_id, expenses, shares)

    def get_group_balances(self, group_id: GroupId) -> list[NetBalance]:
        with self._lock:
            expenses, shares = self._snapshot(group_id)
        return compute_group_balances(expenses, shares)

    def get_settlement_plan(self, group_id: GroupId, strict: bool | None = None) -> list[DebtSettlement]:
        """
        Propose payments that settle a group's current balances.

        Args:
            group_id: Group to settle
            strict: Raise on non-zero-sum balances; None uses the configured default
        """
        if strict is None:
            strict = get_config().settlement.strict_zero_sum
        return optimize_debts(self.get_group_balances(group_id), strict=strict)

    def get_user_debts(self, group_id: GroupId) -> dict[ParticipantId, dict[ParticipantId, Decimal]]:
        with self._lock:
            expenses, shares = self._snapshot(group_id)
        return calculate_user_debts(group_id, shares, expenses)

    def get_group_stats(self, group_id: GroupId) -> GroupExpenseStats:
        expenses = self.get_expenses_by_group(group_id)

        category_totals: dict[str, Decimal] = {}
        for expense in expenses:
            category_totals[expense.category] = category_totals.get(expense.category, ZERO) + expense.amount

        return GroupExpenseStats(
            group_id=group_id,
            total_amount=sum_amounts(expense.amount for expense in expenses),
            total_expenses=len(expenses),
            settled_expenses=sum(1 for expense in expenses if expense.is_settled),
            category_totals=category_totals,
        )

    # Helpers

    def _get_expense(self, expense_id: int) -> Expense:
        expense = self._expenses.get(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(f"Expense not found: {expense_id}")
        return expense

    def _get_share(self, expense_id: int, user_id: ParticipantId) -> ExpenseShare:
        self._get_expense(expense_id)
        share = self._shares[expense_id].get(user_id)
        if share is None:
            raise ShareNotFoundError(f"Expense share not found - Expense: {expense_id}, User: {user_id}")
        return share

    def _all_paid(self, expense_id: int) -> bool:
        shares = self._shares[expense_id].values()
        return bool(shares) and all(share.is_paid for share in shares)

    def _reusable_input(self, expense: Expense, new_type: SplitType) -> ParticipantInput:
        previous = self._inputs[expense.id]
        if new_type is SplitType.EQUAL:
            return list(previous)
        if new_type is not expense.split_type:
            raise InvalidInputError(f"Changing split type to {new_type.value} requires participant input")
        return previous

    def _snapshot(self, group_id: GroupId | None) -> tuple[list[Expense], list[ExpenseShare]]:
        expense_ids = [
            expense_id
            for expense_id, expense in self._expenses.items()
            if group_id is None or expense.group_id == group_id
        ]
        expenses = [self._expenses[expense_id] for expense_id in expense_ids]
        shares = [share for expense_id in expense_ids for share in self._shares[expense_id].values()]
        return expenses, shares
