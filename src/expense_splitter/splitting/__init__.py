"""
Expense Splitting Package

Turns an expense total, a split policy and participant input into one
ExpenseShare per participant whose amounts sum exactly to the total.

Key Components:
- strategies: equal, percentage, custom and by-shares algorithms plus the
  ``split`` dispatcher
"""

from .strategies import (
    ParticipantInput,
    split,
    split_by_percentage,
    split_by_shares,
    split_custom,
    split_equal,
    split_expense,
)

__all__ = [
    "ParticipantInput",
    "split",
    "split_by_percentage",
    "split_by_shares",
    "split_custom",
    "split_equal",
    "split_expense",
]
