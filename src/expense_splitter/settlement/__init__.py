"""
Debt Settlement Package

Derives net balances from expenses and shares and proposes payments that
settle them.

Key Components:
- balances: net balance per participant (paid minus unpaid owed)
- optimizer: greedy largest-creditor settlement plan
- debts: per-user "who owes whom" map over unpaid shares
"""

from .balances import compute_balance, compute_group_balances, total_net
from .debts import calculate_user_debts
from .optimizer import apply_settlements, optimize_debts

__all__ = [
    "apply_settlements",
    "calculate_user_debts",
    "compute_balance",
    "compute_group_balances",
    "optimize_debts",
    "total_net",
]
