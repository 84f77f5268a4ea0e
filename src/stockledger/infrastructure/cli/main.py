import click

from stockledger.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_consume,
    inventory_init,
    inventory_manufacture,
    inventory_reorder_check,
    inventory_reserve,
    inventory_schedule,
    inventory_show,
)
from stockledger.infrastructure.cli.transaction_commands import transactions_list
from stockledger.infrastructure.config import load_settings
from stockledger.logging_config import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """stockledger: inventory accounting engine"""
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_json)
    ctx.obj = settings


@cli.group()
def inventory() -> None:
    """Manage inventory records and stock movements."""


@cli.group()
def transactions() -> None:
    """Inspect the inventory transaction log."""


# Register subcommands
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_consume)
inventory.add_command(inventory_init)
inventory.add_command(inventory_manufacture)
inventory.add_command(inventory_reorder_check)
inventory.add_command(inventory_reserve)
inventory.add_command(inventory_schedule)
inventory.add_command(inventory_show)
transactions.add_command(transactions_list)
