"""
Core Utilities Package

Shared primitives used by the splitting and settlement engine.

This package provides:
- Fixed-scale decimal arithmetic for exact currency handling
- Immutable domain models for expenses, shares, balances and settlements
- Structured error types
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    SettlementConfig,
    SplitConfig,
    get_config,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    CENT,
    SCALE,
    ZERO,
    allocate_remainder,
    calculate_percentage,
    format_amount,
    parse_amount,
    proportional_amount,
    round_amount,
    sum_amounts,
    validate_sum_equals_total,
)
from .errors import (
    ExpenseNotFoundError,
    InvalidInputError,
    PreconditionViolatedError,
    ShareNotFoundError,
    SplitterError,
    UnsupportedSplitTypeError,
)
from .models import (
    DebtSettlement,
    Expense,
    ExpenseId,
    ExpenseShare,
    GroupId,
    NetBalance,
    ParticipantId,
    SplitType,
)

__all__ = [
    "CENT",
    # Configuration
    "Config",
    # Data models
    "DebtSettlement",
    "Environment",
    "Expense",
    "ExpenseId",
    # Errors
    "ExpenseNotFoundError",
    "ExpenseShare",
    "GroupId",
    "InvalidInputError",
    "NetBalance",
    "ParticipantId",
    "PreconditionViolatedError",
    "SCALE",
    "SettlementConfig",
    "ShareNotFoundError",
    "SplitConfig",
    "SplitType",
    "SplitterError",
    "UnsupportedSplitTypeError",
    "ZERO",
    # Currency utilities
    "allocate_remainder",
    "calculate_percentage",
    "format_amount",
    "get_config",
    "is_development",
    "is_production",
    "is_test",
    "parse_amount",
    "proportional_amount",
    "reload_config",
    "round_amount",
    "sum_amounts",
    "validate_sum_equals_total",
]
