"""CLI commands for the transaction log."""

from __future__ import annotations

import click

from stockledger.application.show_transactions import ShowTransactionsHandler
from stockledger.domain.exceptions import StorageError
from stockledger.infrastructure.bootstrap import transaction_repository
from stockledger.infrastructure.config import Settings


@click.command("list")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--ref", "reference_doc_id", default=None, help="Only this reference document.")
@click.pass_obj
def transactions_list(
    settings: Settings, product_id: str, reference_doc_id: str | None
) -> None:
    """Show the transaction history of a product."""
    handler = ShowTransactionsHandler(transaction_repo=transaction_repository(settings))

    try:
        lines = handler.handle(product_id, reference_doc_id=reference_doc_id)
    except StorageError as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'Number':<11} {'Date':<20} {'Type':<13} {'Qty':>6} {'Before':>7} "
        f"{'After':>7}  Reference"
    )
    click.echo("-" * 80)
    for line in lines:
        before = "" if line.quantity_before is None else line.quantity_before
        after = "" if line.quantity_after is None else line.quantity_after
        click.echo(
            f"{line.transaction_number:<11} {line.transaction_date:<20} {line.type:<13} "
            f"{line.quantity:>6} {before:>7} {after:>7}  {line.reference}"
        )
