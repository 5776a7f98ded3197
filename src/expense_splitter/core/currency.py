#!/usr/bin/env python3
"""
Decimal Ledger Primitives

Fixed-scale decimal helpers shared by every splitting strategy and by the
settlement code. All amounts are ``decimal.Decimal`` values at a scale of two
places (cents).

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Round half-up to 2 places at the point of allocation, never earlier
- Compare totals at full precision before any rounding
- Give any rounding remainder to the last item so sums stay exact
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Union

from .errors import InvalidInputError

SCALE = 2
CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

# Local context so results never depend on the caller's thread-local context.
_CONTEXT = Context(prec=34, rounding=ROUND_HALF_UP)

AmountLike = Union[str, int, Decimal]


def round_amount(value: Decimal) -> Decimal:
    """
    Round a decimal value to currency scale using round-half-up.

    Example:
        round_amount(Decimal("33.335")) -> Decimal("33.34")
    """
    return value.quantize(CENT, rounding=ROUND_HALF_UP, context=_CONTEXT)


def parse_amount(value: AmountLike) -> Decimal:
    """
    Parse a monetary or weight value into an exact Decimal.

    No rounding is applied: callers that validate sums compare the exact input.

    Args:
        value: String like '$1,234.50' or '12', an int, or a Decimal

    Returns:
        Exact Decimal value

    Raises:
        InvalidInputError: For floats, booleans, or unparsable strings

    Examples:
        parse_amount("$12.34") -> Decimal("12.34")
        parse_amount(12) -> Decimal("12")
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidInputError(f"Amounts must be exact decimals, got {type(value).__name__}: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        clean = value.replace("$", "").replace(",", "").strip()
        if not clean:
            raise InvalidInputError("Empty amount string")
        # "-$12.34" becomes "-12.34" after stripping the symbol
        try:
            result = Decimal(clean)
        except InvalidOperation as e:
            raise InvalidInputError(f"Invalid amount: {value!r}") from e
    else:
        raise InvalidInputError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise InvalidInputError(f"Amount must be finite: {value!r}")
    return result


def calculate_percentage(amount: Decimal, total: Decimal) -> Decimal:
    """
    Percentage of ``total`` represented by ``amount``, rounded to 2 places.

    Returns 0.00 when total is zero.
    """
    if total == 0:
        return ZERO
    return round_amount(_CONTEXT.divide(_CONTEXT.multiply(amount, HUNDRED), total))


def proportional_amount(total: Decimal, weight: Decimal, total_weight: Decimal) -> Decimal:
    """
    Calculate ``total * weight / total_weight`` rounded to currency scale.

    Args:
        total: Amount being distributed
        weight: This item's weight (percentage, ratio)
        total_weight: Sum of all weights (100 for percentages)

    Returns:
        Rounded proportional amount (remainder handled separately)
    """
    if total_weight == 0:
        return ZERO
    return round_amount(_CONTEXT.divide(_CONTEXT.multiply(total, weight), total_weight))


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum decimals exactly, starting from a scale-2 zero."""
    result = ZERO
    for amount in amounts:
        result = _CONTEXT.add(result, amount)
    return result


def allocate_remainder(amounts: Sequence[Decimal], total: Decimal) -> list[Decimal]:
    """
    Allocate remainder from rounded division to ensure exact sum.

    The last item gets any remainder to guarantee the sum equals the total.

    Args:
        amounts: Rounded amounts before remainder allocation
        total: Target total that amounts should sum to

    Returns:
        List of amounts with the last entry replaced by the remainder
    """
    if not amounts:
        return []

    amounts_copy = list(amounts)
    amounts_copy[-1] = _CONTEXT.subtract(total, sum_amounts(amounts_copy[:-1]))
    return amounts_copy


def validate_sum_equals_total(amounts: Iterable[Decimal], total: Decimal, tolerance: Decimal = ZERO) -> bool:
    """
    Validate that amounts sum to the total.

    Args:
        amounts: Amounts to check
        total: Expected total
        tolerance: Allowed absolute difference (default: exact match)

    Returns:
        True if sum matches within tolerance
    """
    return abs(sum_amounts(amounts) - total) <= tolerance


def format_amount(amount: Decimal) -> str:
    """
    Format a decimal amount as a dollar string.

    Example:
        format_amount(Decimal("-12.5")) -> "-$12.50"
    """
    rounded = round_amount(amount)
    if rounded < 0:
        return f"-${-rounded}"
    return f"${rounded}"
