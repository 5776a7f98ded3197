"""
Ledger Package

In-memory expense and share storage that drives the splitting and settlement
engine through the full expense lifecycle.
"""

from .service import GroupExpenseStats, InMemoryLedger

__all__ = [
    "GroupExpenseStats",
    "InMemoryLedger",
]
