#!/usr/bin/env python3
"""
Error Types

Structured errors raised by the splitting and settlement engine. The engine
raises these and never logs or swallows them; callers turn them into
user-facing messages.
"""


class SplitterError(Exception):
    """Base class for all expense splitter errors."""

    pass


class InvalidInputError(SplitterError, ValueError):
    """Raised when split or settlement input fails validation."""

    pass


class UnsupportedSplitTypeError(SplitterError, ValueError):
    """Raised when a split type tag is not recognised."""

    pass


class PreconditionViolatedError(SplitterError):
    """Raised by strict settlement when credits and debts do not balance."""

    pass


class ExpenseNotFoundError(SplitterError, LookupError):
    """Raised when an expense id is unknown to the ledger."""

    pass


class ShareNotFoundError(SplitterError, LookupError):
    """Raised when no share exists for an (expense, user) pair."""

    pass
