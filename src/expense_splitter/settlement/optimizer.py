#!/usr/bin/env python3
"""
Debt Settlement Optimizer.

Turns net balances into an ordered list of point-to-point payments using
greedy largest-creditor matching. Produces at most
``creditors + debtors - 1`` payments; this is a heuristic, not a proven
minimal plan.

Algorithm:
1. Split balances into creditors (net > 0) and debtors (net < 0)
2. Walk debtors in input order
3. Each debtor pays the creditor with the largest remaining credit
   (ties go to the creditor seen first) until the debt is cleared
"""

import heapq
import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from ..core.currency import ZERO
from ..core.errors import InvalidInputError, PreconditionViolatedError
from ..core.models import DebtSettlement, NetBalance, ParticipantId
from .balances import total_net

logger = logging.getLogger(__name__)


def optimize_debts(balances: Iterable[NetBalance], strict: bool = False) -> list[DebtSettlement]:
    """
    Compute a settlement plan for a set of net balances.

    Balances are expected to be zero-sum. In lenient mode a mismatch leaves
    residual unsettled balances and logs a warning; in strict mode it raises
    before any settlement is produced.

    Args:
        balances: One NetBalance per participant
        strict: Raise on non-zero-sum input instead of leaving a residual

    Returns:
        Settlements in the order they were matched

    Raises:
        InvalidInputError: If a participant appears more than once
        PreconditionViolatedError: In strict mode, if credits != debts
    """
    balances = list(balances)

    logger.debug(f"Optimizing debts for {len(balances)} users")

    user_ids = [balance.user_id for balance in balances]
    if len(set(user_ids)) != len(user_ids):
        raise InvalidInputError(f"Duplicate participants in balances: {user_ids}")

    credits, debts = total_net(balances)
    if strict and credits != debts:
        raise PreconditionViolatedError(f"Balances are not zero-sum: credits {credits} != debts {debts}")

    # Max-heap on remaining credit; input position breaks ties
    creditor_heap: list[tuple[Decimal, int, ParticipantId]] = [
        (-balance.net_balance, index, balance.user_id)
        for index, balance in enumerate(balances)
        if balance.net_balance > 0
    ]
    heapq.heapify(creditor_heap)

    debtors = [(balance.user_id, -balance.net_balance) for balance in balances if balance.net_balance < 0]

    settlements: list[DebtSettlement] = []
    residual_debt = ZERO

    for debtor_id, debt_amount in debtors:
        while debt_amount > 0 and creditor_heap:
            neg_credit, index, creditor_id = heapq.heappop(creditor_heap)
            credit_amount = -neg_credit

            settlement_amount = min(debt_amount, credit_amount)
            settlements.append(DebtSettlement(debtor_id, creditor_id, settlement_amount))

            debt_amount -= settlement_amount
            credit_amount -= settlement_amount
            if credit_amount > 0:
                heapq.heappush(creditor_heap, (-credit_amount, index, creditor_id))

        residual_debt += debt_amount

    residual_credit = sum((-neg for neg, _, _ in creditor_heap), ZERO)
    if residual_debt or residual_credit:
        logger.warning(
            f"Settlement left residual balances: unsettled debt {residual_debt}, "
            f"unsettled credit {residual_credit}"
        )

    logger.debug(f"Generated {len(settlements)} debt settlements")
    return settlements


def apply_settlements(
    balances: Sequence[NetBalance], settlements: Iterable[DebtSettlement]
) -> dict[ParticipantId, Decimal]:
    """
    Apply a settlement plan to net balances.

    Returns:
        Net balance per participant after every payment; a complete plan for
        zero-sum input leaves every value at zero
    """
    result: dict[ParticipantId, Decimal] = {balance.user_id: balance.net_balance for balance in balances}
    for settlement in settlements:
        result[settlement.from_user_id] = result.get(settlement.from_user_id, ZERO) + settlement.amount
        result[settlement.to_user_id] = result.get(settlement.to_user_id, ZERO) - settlement.amount
    return result
