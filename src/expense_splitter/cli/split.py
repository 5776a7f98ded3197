#!/usr/bin/env python3
"""
Split CLI - Divide One Expense Among Participants
"""

import click

from ..core.currency import format_amount, sum_amounts
from ..core.errors import SplitterError
from ..core.json_utils import format_json
from ..core.models import SplitType
from ..splitting import split as split_amount


def parse_participants(values: tuple[str, ...], split_type: SplitType) -> list[str] | dict[str, str]:
    """
    Parse repeated --participant options.

    EQUAL takes bare ids ("alice"); the weighted policies take "id=value"
    ("alice=60"). Order is preserved.
    """
    if split_type is SplitType.EQUAL:
        return [value.split("=", 1)[0].strip() for value in values]

    weights: dict[str, str] = {}
    for value in values:
        user_id, sep, weight = value.partition("=")
        if not sep or not user_id.strip() or not weight.strip():
            raise click.BadParameter(f"Expected ID=VALUE, got {value!r}", param_hint="--participant")
        if user_id.strip() in weights:
            raise click.BadParameter(f"Duplicate participant {user_id.strip()!r}", param_hint="--participant")
        weights[user_id.strip()] = weight.strip()
    return weights


@click.command()
@click.option("--amount", required=True, help="Expense total, e.g. 100.00")
@click.option(
    "--type",
    "split_type",
    default="equal",
    show_default=True,
    help="Split policy: equal, percentage, custom (fixed) or shares",
)
@click.option(
    "--participant",
    "-p",
    "participants",
    multiple=True,
    required=True,
    help="Participant id (equal) or ID=VALUE (other policies); repeat in order",
)
@click.option("--json", "as_json", is_flag=True, help="Print shares as JSON")
def split(amount: str, split_type: str, participants: tuple[str, ...], as_json: bool) -> None:
    """
    Split an expense among participants.

    The last participant absorbs any rounding remainder.

    Examples:
      expense-splitter split --amount 100 -p alice -p bob -p carol
      expense-splitter split --amount 200 --type percentage -p alice=60 -p bob=40
      expense-splitter split --amount 100 --type shares -p alice=1 -p bob=2
    """
    try:
        policy = SplitType.parse(split_type)
        shares = split_amount(amount, policy, parse_participants(participants, policy))
    except SplitterError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(format_json([share.to_dict() for share in shares]))
        return

    total = sum_amounts(share.share_amount for share in shares)
    click.echo(f"Split {format_amount(total)} ({policy.value}) among {len(shares)} participants:")
    for share in shares:
        click.echo(f"  {share.user_id}: {format_amount(share.share_amount)} ({share.percentage}%)")
