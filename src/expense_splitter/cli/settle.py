#!/usr/bin/env python3
"""
Settle CLI - Balances and Settlement Plans from a JSON Ledger File

Input is either ``{"expenses": [...], "shares": [...]}`` (balances are
derived) or ``{"balances": [{"user_id": ..., "net_balance": ...}]}``.
"""

from dataclasses import replace
from pathlib import Path

import click

from ..core.config import get_config
from ..core.currency import format_amount
from ..core.errors import SplitterError
from ..core.json_utils import format_json, read_json, write_json
from ..core.models import Expense, ExpenseShare, NetBalance
from ..settlement import calculate_user_debts, compute_group_balances, optimize_debts


def load_balances(data: dict, group_id: str | None) -> tuple[list[NetBalance], dict | None]:
    """
    Build net balances (and the per-user debt map when expenses are present).

    Args:
        data: Parsed ledger document
        group_id: Restrict to expenses whose group id matches; ids are compared
            as strings, so 1 and "1" name the same group

    Returns:
        Tuple of (balances, user debts or None)
    """
    if "balances" in data:
        return [NetBalance.from_dict(item) for item in data["balances"]], None

    expenses = [Expense.from_dict(item) for item in data.get("expenses", [])]
    if group_id is not None:
        expenses = [replace(expense, group_id=group_id) for expense in expenses if str(expense.group_id) == group_id]
    expense_ids = {expense.id for expense in expenses}
    shares = [
        share
        for share in (ExpenseShare.from_dict(item) for item in data.get("shares", []))
        if share.expense_id in expense_ids
    ]

    debts = calculate_user_debts(group_id, shares, expenses) if group_id is not None else None
    return compute_group_balances(expenses, shares), debts


@click.command()
@click.option("--input-file", required=True, help="Ledger JSON file (expenses + shares, or balances)")
@click.option("--group-id", help="Only settle expenses of this group")
@click.option("--strict/--lenient", default=None, help="Fail when balances are not zero-sum (default: config)")
@click.option("--output-file", help="Also write the plan as JSON to this path")
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON")
@click.pass_context
def settle(
    ctx: click.Context,
    input_file: str,
    group_id: str | None,
    strict: bool | None,
    output_file: str | None,
    as_json: bool,
) -> None:
    """
    Compute net balances and a settlement plan.

    Examples:
      expense-splitter settle --input-file trip.json
      expense-splitter settle --input-file trip.json --group-id 1 --strict
    """
    input_path = Path(input_file)
    if not input_path.exists():
        raise click.ClickException(f"Input file not found: {input_path}")

    try:
        data = read_json(input_path)
        if not isinstance(data, dict):
            raise click.ClickException("Ledger file must contain a JSON object")
        balances, debts = load_balances(data, group_id)
        if strict is None:
            strict = get_config().settlement.strict_zero_sum
        settlements = optimize_debts(balances, strict=strict)
    except (SplitterError, KeyError, ValueError) as e:
        raise click.ClickException(f"Invalid ledger file: {e}") from e

    result = {
        "balances": [balance.to_dict() for balance in balances],
        "settlements": [settlement.to_dict() for settlement in settlements],
    }
    if debts is not None:
        result["user_debts"] = {
            str(debtor): {str(creditor): str(amount) for creditor, amount in owed.items()}
            for debtor, owed in debts.items()
        }

    if output_file:
        write_json(output_file, result)

    if as_json:
        click.echo(format_json(result))
        return

    verbose = (ctx.obj or {}).get("verbose", False)
    click.echo("Balances:")
    for balance in balances:
        detail = f" (paid {format_amount(balance.total_paid)}, owes {format_amount(balance.total_owed)})"
        click.echo(f"  {balance.user_id}: {format_amount(balance.net_balance)}{detail if verbose else ''}")

    click.echo()
    if not settlements:
        click.echo("Nothing to settle.")
        return

    click.echo(f"Settlement plan ({len(settlements)} payments):")
    for settlement in settlements:
        click.echo(f"  {settlement.from_user_id} pays {settlement.to_user_id} {format_amount(settlement.amount)}")
