"""
Expense Splitter - Shared Expense Splitting and Debt Settlement

Divides shared costs among participants with exact decimal arithmetic and
proposes a small set of payments that settles a group's mutual debts.

Key Features:
- Equal, percentage, custom and by-shares splits that always sum exactly
- Net balances derived from expenses and unpaid shares
- Greedy largest-creditor settlement plans
- Optional strict zero-sum checking for settlement input

Domain Packages:
- core: Decimal currency helpers, data models, errors, configuration
- splitting: Split strategy engine
- settlement: Balance aggregation, debt optimization, per-user debt map
- ledger: In-memory expense store driving the engine
- cli: Command-line interface

Example Usage:
    from expense_splitter import SplitType, split, optimize_debts

    shares = split("100.00", SplitType.EQUAL, ["alice", "bob", "carol"])
"""

__version__ = "0.1.0"
__author__ = "Expense Splitter Developers"

# Export core types
from .core.config import Environment, get_config
from .core.errors import (
    InvalidInputError,
    PreconditionViolatedError,
    SplitterError,
    UnsupportedSplitTypeError,
)
from .core.models import DebtSettlement, Expense, ExpenseShare, NetBalance, SplitType

# Export engine operations
from .settlement import calculate_user_debts, compute_balance, optimize_debts
from .splitting import split

__all__ = [
    # Core models
    "DebtSettlement",
    "Expense",
    "ExpenseShare",
    "NetBalance",
    "SplitType",
    # Errors
    "InvalidInputError",
    "PreconditionViolatedError",
    "SplitterError",
    "UnsupportedSplitTypeError",
    # Configuration
    "Environment",
    "get_config",
    # Engine operations
    "calculate_user_debts",
    "compute_balance",
    "optimize_debts",
    "split",
]
