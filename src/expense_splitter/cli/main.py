#!/usr/bin/env python3
"""
Main CLI Entry Point for Expense Splitter

Groups the ``split`` and ``settle`` commands with a couple of utility
commands. Global options are applied to the environment before the
configuration is loaded, so they take effect for every subcommand.
"""

import logging
import os

import click

from .. import __author__, __version__
from ..core.config import Config, get_config
from .settle import settle
from .split import split


def _apply_global_options(config_env: str | None, debug: bool) -> Config:
    if config_env:
        os.environ["SPLITTER_ENV"] = config_env
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    config = get_config()
    if debug:
        logging.getLogger("expense_splitter").setLevel(logging.DEBUG)
    return config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Show balance details and the active environment")
@click.option("--debug", is_flag=True, help="Enable debug logging for the engine")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Expense Splitter - Shared Expense Splitting and Debt Settlement

    Splits shared costs among participants with exact decimal arithmetic and
    proposes payments that settle a group's balances.
    """
    ctx.ensure_object(dict)
    try:
        config = _apply_global_options(config_env, debug)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj.update(verbose=verbose, debug=debug, config=config)

    if verbose:
        click.echo(f"Environment: {config.environment.value}")


@main.command()
def version() -> None:
    """Show version information."""
    click.echo(f"Expense Splitter v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command(name="config")
@click.pass_obj
def show_config(obj: dict) -> None:
    """Show current configuration."""
    config = obj["config"]
    settings = [
        ("Environment", config.environment.value),
        ("Default Currency", config.split.default_currency),
        ("Default Category", config.split.default_category),
        ("Strict Settlement", config.settlement.strict_zero_sum),
        ("Debug Mode", config.debug),
        ("Log Level", config.log_level),
    ]

    click.echo("Current Configuration:")
    for label, value in settings:
        click.echo(f"  {label}: {value}")


main.add_command(split)
main.add_command(settle)


if __name__ == "__main__":
    main()
