#!/usr/bin/env python3
"""
Split Strategy Engine.

Divides an expense total among participants using one of four policies:
equal, percentage, custom (fixed amounts) and by-shares (ratios).

Key Features:
- Exact decimal arithmetic at currency scale, round-half-up
- Remainder-to-last: the last participant in input order absorbs rounding
  residue, so shares always sum exactly to the total
- All validation happens before any share is produced
"""

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal

from ..core.currency import (
    HUNDRED,
    AmountLike,
    allocate_remainder,
    calculate_percentage,
    parse_amount,
    proportional_amount,
    round_amount,
    sum_amounts,
    validate_sum_equals_total,
)
from ..core.errors import InvalidInputError, UnsupportedSplitTypeError
from ..core.models import Expense, ExpenseId, ExpenseShare, ParticipantId, SplitType

logger = logging.getLogger(__name__)

ParticipantInput = Sequence[ParticipantId] | Mapping[ParticipantId, AmountLike]


def _parse_total(total_amount: AmountLike) -> Decimal:
    total = parse_amount(total_amount)
    if total < 0:
        raise InvalidInputError(f"Total amount cannot be negative: {total}")
    if total != round_amount(total):
        raise InvalidInputError(f"Total amount must have at most 2 decimal places: {total}")
    return total


def _parse_weights(weights: Mapping[ParticipantId, AmountLike], label: str) -> dict[ParticipantId, Decimal]:
    if not isinstance(weights, Mapping):
        raise InvalidInputError(f"{label} must be a mapping of participant to value")
    if not weights:
        raise InvalidInputError(f"No {label} provided")

    parsed = {user_id: parse_amount(value) for user_id, value in weights.items()}
    for user_id, value in parsed.items():
        if value < 0:
            raise InvalidInputError(f"{label} for {user_id!r} cannot be negative: {value}")
    return parsed


def _allocate(total: Decimal, rounded: list[Decimal]) -> list[Decimal]:
    """Give the remainder to the last entry, refusing a negative remainder."""
    amounts = allocate_remainder(rounded, total)
    if amounts[-1] < 0:
        raise InvalidInputError(
            f"Total {total} is too small to split among {len(amounts)} participants without a negative share"
        )
    return amounts


def split_equal(
    total_amount: AmountLike,
    participant_ids: Sequence[ParticipantId],
    expense_id: ExpenseId | None = None,
) -> list[ExpenseShare]:
    """
    Split a total equally among participants.

    Every participant except the last gets ``round(total / n, 2)``; the last
    gets whatever remains.

    Args:
        total_amount: Expense total
        participant_ids: Ordered, unique participant ids
        expense_id: Id stamped on each produced share

    Returns:
        One ExpenseShare per participant, in input order

    Raises:
        InvalidInputError: If the list is empty or contains duplicates, or if
            the total is too small to split without a negative last share
    """
    total = _parse_total(total_amount)
    if isinstance(participant_ids, (str, bytes, Mapping)):
        raise InvalidInputError("Equal split expects a sequence of participant ids")
    participants = list(participant_ids)
    if not participants:
        raise InvalidInputError("No participants provided for expense split")
    if len(set(participants)) != len(participants):
        raise InvalidInputError(f"Duplicate participants in equal split: {participants}")

    share_amount = proportional_amount(total, Decimal(1), Decimal(len(participants)))
    amounts = _allocate(total, [share_amount] * len(participants))

    shares = [
        ExpenseShare(
            expense_id=expense_id,
            user_id=user_id,
            share_amount=amount,
            percentage=calculate_percentage(amount, total),
        )
        for user_id, amount in zip(participants, amounts)
    ]

    logger.debug(f"Split {total} equally among {len(shares)} participants")
    return shares


def split_by_percentage(
    total_amount: AmountLike,
    percentages: Mapping[ParticipantId, AmountLike],
    expense_id: ExpenseId | None = None,
) -> list[ExpenseShare]:
    """
    Split a total by per-participant percentages.

    Percentages must sum to exactly 100 (compared before any rounding). Each
    share keeps its input percentage verbatim.

    Raises:
        InvalidInputError: If percentages are empty, negative, or don't sum to 100,
            or if rounding would leave the last share negative
    """
    total = _parse_total(total_amount)
    parsed = _parse_weights(percentages, "percentage shares")

    total_percentage = sum_amounts(parsed.values())
    if total_percentage != HUNDRED:
        raise InvalidInputError(f"Percentages must sum to 100%, got {total_percentage}%")

    rounded = [proportional_amount(total, pct, HUNDRED) for pct in parsed.values()]
    amounts = _allocate(total, rounded)

    shares = [
        ExpenseShare(expense_id=expense_id, user_id=user_id, share_amount=amount, percentage=pct)
        for (user_id, pct), amount in zip(parsed.items(), amounts)
    ]

    logger.debug(f"Split {total} by percentages among {len(shares)} participants")
    return shares


def split_custom(
    total_amount: AmountLike,
    custom_amounts: Mapping[ParticipantId, AmountLike],
    expense_id: ExpenseId | None = None,
) -> list[ExpenseShare]:
    """
    Split a total by caller-supplied fixed amounts.

    The amounts must be whole cents and already sum exactly to the total;
    there is no rounding tolerance.

    Raises:
        InvalidInputError: If amounts are empty, negative, finer than a cent,
            or don't sum to the total
    """
    total = _parse_total(total_amount)
    parsed = _parse_weights(custom_amounts, "custom amounts")
    for user_id, amount in parsed.items():
        if amount != round_amount(amount):
            raise InvalidInputError(f"Custom amount for {user_id!r} must have at most 2 decimal places: {amount}")

    if not validate_sum_equals_total(parsed.values(), total):
        raise InvalidInputError(
            f"Custom amounts must sum to total expense amount: {sum_amounts(parsed.values())} != {total}"
        )

    shares = [
        ExpenseShare(
            expense_id=expense_id,
            user_id=user_id,
            share_amount=amount,
            percentage=calculate_percentage(amount, total),
        )
        for user_id, amount in parsed.items()
    ]

    logger.debug(f"Split {total} by custom amounts among {len(shares)} participants")
    return shares


def split_by_shares(
    total_amount: AmountLike,
    share_ratios: Mapping[ParticipantId, AmountLike],
    expense_id: ExpenseId | None = None,
) -> list[ExpenseShare]:
    """
    Split a total in proportion to per-participant weights.

    Example: weights {A: 1, B: 1, C: 2} on 100.00 give 25.00 / 25.00 / 50.00.

    Raises:
        InvalidInputError: If weights are empty, negative, or total weight <= 0,
            or if rounding would leave the last share negative
    """
    total = _parse_total(total_amount)
    parsed = _parse_weights(share_ratios, "share ratios")

    total_weight = sum_amounts(parsed.values())
    if total_weight <= 0:
        raise InvalidInputError("Total shares must be greater than zero")

    rounded = [proportional_amount(total, weight, total_weight) for weight in parsed.values()]
    amounts = _allocate(total, rounded)

    shares = [
        ExpenseShare(
            expense_id=expense_id,
            user_id=user_id,
            share_amount=amount,
            percentage=calculate_percentage(amount, total),
        )
        for user_id, amount in zip(parsed, amounts)
    ]

    logger.debug(f"Split {total} by shares among {len(shares)} participants")
    return shares


def split(
    total_amount: AmountLike,
    split_type: SplitType | str,
    participants: ParticipantInput,
    expense_id: ExpenseId | None = None,
) -> list[ExpenseShare]:
    """
    Split a total according to a split policy.

    Args:
        total_amount: Expense total (non-negative, at most 2 decimal places)
        split_type: SplitType member or its name/value
        participants: Ordered ids for EQUAL; ordered mapping of id to
            percentage / amount / weight for the other policies
        expense_id: Id stamped on each produced share

    Returns:
        One ExpenseShare per participant whose amounts sum exactly to the total

    Raises:
        UnsupportedSplitTypeError: If the split type is not recognised
        InvalidInputError: If the participant input fails validation
    """
    policy = SplitType.parse(split_type)

    if policy is SplitType.EQUAL:
        if isinstance(participants, Mapping):
            # Equal split only uses the ids
            participants = list(participants)
        return split_equal(total_amount, participants, expense_id)  # type: ignore[arg-type]
    if policy is SplitType.PERCENTAGE:
        return split_by_percentage(total_amount, participants, expense_id)  # type: ignore[arg-type]
    if policy is SplitType.CUSTOM:
        return split_custom(total_amount, participants, expense_id)  # type: ignore[arg-type]
    if policy is SplitType.BY_SHARES:
        return split_by_shares(total_amount, participants, expense_id)  # type: ignore[arg-type]

    raise UnsupportedSplitTypeError(f"Unsupported split type: {policy}")


def split_expense(expense: Expense, participants: ParticipantInput) -> list[ExpenseShare]:
    """Split an expense using its own amount, split type and id."""
    logger.debug(f"Splitting expense {expense.id} of type {expense.split_type.value}")
    return split(expense.amount, expense.split_type, participants, expense_id=expense.id)
