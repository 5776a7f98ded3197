#!/usr/bin/env python3
"""
Core Data Models

Immutable domain models for expenses, shares, balances and settlements.
Amounts are exact ``Decimal`` values at currency scale; no floats.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from .currency import HUNDRED, ZERO, parse_amount, round_amount
from .errors import InvalidInputError, UnsupportedSplitTypeError

ParticipantId = Union[int, str]
ExpenseId = Union[int, str]
GroupId = Union[int, str]


class SplitType(Enum):
    """How an expense total is divided among participants."""

    EQUAL = "equal"
    PERCENTAGE = "percentage"
    CUSTOM = "custom"
    BY_SHARES = "by_shares"

    @classmethod
    def parse(cls, value: "SplitType | str") -> "SplitType":
        """
        Resolve a split type from a member, name, value, or alias.

        Accepts e.g. ``"EQUAL"``, ``"percentage"``, ``"fixed"``, ``"shares"``.

        Raises:
            UnsupportedSplitTypeError: If the value names no split type
        """
        if isinstance(value, SplitType):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            aliases = {"fixed": "custom", "shares": "by_shares", "ratio": "by_shares"}
            key = aliases.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        raise UnsupportedSplitTypeError(f"Unsupported split type: {value!r}")


def _amount_str(value: Decimal) -> str:
    return str(round_amount(value))


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass(frozen=True)
class ExpenseShare:
    """
    One participant's portion of a single expense.

    Uniquely keyed by (expense_id, user_id). Payment status is binary; toggling
    it returns a new share.
    """

    expense_id: ExpenseId | None
    user_id: ParticipantId
    share_amount: Decimal
    percentage: Decimal
    is_paid: bool = False
    paid_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.share_amount < 0:
            raise InvalidInputError(f"Share amount cannot be negative: {self.share_amount}")
        if self.percentage < 0 or self.percentage > HUNDRED:
            raise InvalidInputError(f"Percentage must be between 0 and 100: {self.percentage}")

    @property
    def is_owed_money(self) -> bool:
        """True while this share is unpaid and non-zero."""
        return self.share_amount > 0 and not self.is_paid

    def mark_paid(self, paid_at: datetime | None = None) -> "ExpenseShare":
        """Return a paid copy, stamped with ``paid_at`` (default: now)."""
        if self.is_paid:
            return self
        return replace(self, is_paid=True, paid_at=paid_at or datetime.now())

    def mark_unpaid(self) -> "ExpenseShare":
        """Return an unpaid copy with the paid timestamp cleared."""
        return replace(self, is_paid=False, paid_at=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "expense_id": self.expense_id,
            "user_id": self.user_id,
            "share_amount": _amount_str(self.share_amount),
            "percentage": str(self.percentage),
            "is_paid": self.is_paid,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExpenseShare":
        """
        Create ExpenseShare from a JSON-style dict.

        Args:
            data: Dict with expense_id, user_id, share_amount and optional
                percentage, is_paid, paid_at

        Returns:
            ExpenseShare instance
        """
        return cls(
            expense_id=data.get("expense_id"),
            user_id=data["user_id"],
            share_amount=parse_amount(data["share_amount"]),
            percentage=parse_amount(data.get("percentage", "0")),
            is_paid=bool(data.get("is_paid", False)),
            paid_at=_parse_datetime(data.get("paid_at")),
        )


@dataclass(frozen=True)
class Expense:
    """
    A single shared cost paid by one group member.

    Shares are owned by the expense: they are created with it and deleted
    with it.
    """

    id: ExpenseId | None
    group_id: GroupId | None
    paid_by_user_id: ParticipantId
    description: str
    amount: Decimal
    currency: str = "USD"
    category: str = "Other"
    split_type: SplitType = SplitType.EQUAL
    notes: str | None = None
    expense_date: datetime = field(default_factory=datetime.now)
    is_settled: bool = False

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise InvalidInputError("Expense description cannot be empty")
        if self.amount < 0:
            raise InvalidInputError(f"Expense amount cannot be negative: {self.amount}")
        if not self.currency or len(self.currency) != 3:
            raise InvalidInputError(f"Currency must be a 3-letter code: {self.currency!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "group_id": self.group_id,
            "paid_by_user_id": self.paid_by_user_id,
            "description": self.description,
            "amount": _amount_str(self.amount),
            "currency": self.currency,
            "category": self.category,
            "split_type": self.split_type.value,
            "notes": self.notes,
            "expense_date": self.expense_date.isoformat(),
            "is_settled": self.is_settled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """
        Create Expense from a JSON-style dict.

        Only id, paid_by_user_id and amount are required; description defaults
        to "Expense".
        """
        expense_date = _parse_datetime(data.get("expense_date"))
        return cls(
            id=data.get("id"),
            group_id=data.get("group_id"),
            paid_by_user_id=data["paid_by_user_id"],
            description=data.get("description") or "Expense",
            amount=parse_amount(data["amount"]),
            currency=data.get("currency", "USD"),
            category=data.get("category", "Other"),
            split_type=SplitType.parse(data.get("split_type", "equal")),
            notes=data.get("notes"),
            expense_date=expense_date or datetime.now(),
            is_settled=bool(data.get("is_settled", False)),
        )


@dataclass(frozen=True)
class NetBalance:
    """
    A participant's aggregate position across a group.

    Positive ``net_balance`` means the group owes the participant.
    """

    user_id: ParticipantId
    total_owed: Decimal
    total_paid: Decimal
    net_balance: Decimal

    @classmethod
    def from_net(cls, user_id: ParticipantId, net_balance: Decimal) -> "NetBalance":
        """Build a balance from a bare net figure (paid/owed split by sign)."""
        if net_balance >= 0:
            return cls(user_id, ZERO, net_balance, net_balance)
        return cls(user_id, -net_balance, ZERO, net_balance)

    @property
    def is_creditor(self) -> bool:
        return self.net_balance > 0

    @property
    def is_debtor(self) -> bool:
        return self.net_balance < 0

    @property
    def is_even(self) -> bool:
        return self.net_balance == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "total_owed": _amount_str(self.total_owed),
            "total_paid": _amount_str(self.total_paid),
            "net_balance": _amount_str(self.net_balance),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetBalance":
        """Create NetBalance from a dict holding either net_balance alone or all three figures."""
        net = parse_amount(data["net_balance"])
        if "total_owed" not in data and "total_paid" not in data:
            return cls.from_net(data["user_id"], net)
        return cls(
            user_id=data["user_id"],
            total_owed=parse_amount(data.get("total_owed", "0")),
            total_paid=parse_amount(data.get("total_paid", "0")),
            net_balance=net,
        )


@dataclass(frozen=True)
class DebtSettlement:
    """A single proposed payment from a debtor to a creditor."""

    from_user_id: ParticipantId
    to_user_id: ParticipantId
    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidInputError(f"Settlement amount must be positive: {self.amount}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "from_user_id": self.from_user_id,
            "to_user_id": self.to_user_id,
            "amount": _amount_str(self.amount),
        }

    def __str__(self) -> str:
        return f"{self.from_user_id} -> {self.to_user_id}: ${round_amount(self.amount)}"
