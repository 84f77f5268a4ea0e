"""CLI commands for inventory snapshots and stock movements."""

from __future__ import annotations

import click

from stockledger.application.adjust_inventory import AdjustInventoryHandler
from stockledger.application.consume_inventory import ConsumeInventoryHandler
from stockledger.application.record_production import (
    RecordProductionHandler,
    ScheduleProductionHandler,
)
from stockledger.application.reorder_check import ReorderCheckHandler
from stockledger.application.reserve_inventory import ReserveInventoryHandler
from stockledger.application.set_inventory import SetInventoryHandler
from stockledger.application.show_inventory import ShowInventoryHandler
from stockledger.domain.exceptions import DomainException, StorageError
from stockledger.domain.model.results import MissingLine
from stockledger.domain.model.value_objects import InventoryItemSpec, parse_unit_cost
from stockledger.infrastructure.bootstrap import (
    inventory_repository,
    transaction_repository,
)
from stockledger.infrastructure.config import Settings


def _parse_items(raw: str) -> list[InventoryItemSpec]:
    """Parse 'P-100:3,P-200:5' into InventoryItemSpec list."""
    specs: list[InventoryItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(InventoryItemSpec(product_id=product_id.strip(), quantity=qty))
    if not specs:
        raise click.BadParameter("At least one item is required.")
    return specs


def _echo_missing(missing: list[MissingLine]) -> None:
    for line in missing:
        click.echo(f"  missing       {line.product_id or '-'}: {line.reason}", err=True)


@click.command("init")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--title", default=None, help="Product title for display.")
@click.option("--sku", default=None, help="Product SKU.")
@click.option("--reorder-point", type=int, default=None, help="Low-stock threshold.")
@click.option("--reorder-quantity", type=int, default=None, help="Units per reorder.")
@click.option("--unit-cost", default=None, help="Initial unit cost (e.g. 15.00).")
@click.option(
    "--source",
    type=click.Choice(["manufactured", "purchased", "dropship"]),
    default=None,
    help="How the product is replenished.",
)
@click.pass_obj
def inventory_init(
    settings: Settings,
    product_id: str,
    title: str | None,
    sku: str | None,
    reorder_point: int | None,
    reorder_quantity: int | None,
    unit_cost: str | None,
    source: str | None,
) -> None:
    """Create or reconfigure the inventory record of a product."""
    handler = SetInventoryHandler(inventory_repo=inventory_repository(settings))

    try:
        snapshot, created = handler.handle(
            product_id,
            title=title,
            sku=sku,
            reorder_point=reorder_point,
            reorder_quantity=reorder_quantity,
            unit_cost=parse_unit_cost(unit_cost) if unit_cost else None,
            source=source,
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    verb = "created" if created else "updated"
    click.echo(f"Inventory for '{snapshot.display_name}' {verb} (id={snapshot.id})")


@click.command("show")
@click.option("--low", "low_only", is_flag=True, default=False, help="Only low-stock items.")
@click.pass_obj
def inventory_show(settings: Settings, low_only: bool) -> None:
    """Show current inventory levels."""
    handler = ShowInventoryHandler(inventory_repo=inventory_repository(settings))

    try:
        lines = handler.handle(low_stock_only=low_only)
    except StorageError as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(
        f"{'Product':<20} {'On hand':>8} {'Reserved':>9} {'Available':>10} "
        f"{'In prod':>8} {'Value':>12}  Flags"
    )
    click.echo("-" * 78)
    for line in lines:
        click.echo(
            f"{line.product_name:<20} {line.on_hand:>8} {line.reserved:>9} "
            f"{line.available:>10} {line.in_production:>8} {line.total_value:>12}  "
            f"{' '.join(line.flags)}"
        )


@click.command("adjust")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units (signed for adjustments).")
@click.option(
    "--type",
    "kind",
    type=click.Choice(["received", "adjustment", "damaged"]),
    default="received",
    show_default=True,
)
@click.option("--unit-cost", default=None, help="New unit cost (received only).")
@click.option("--notes", default=None, help="Free-text note for the log.")
@click.pass_obj
def inventory_adjust(
    settings: Settings,
    product_id: str,
    quantity: int,
    kind: str,
    unit_cost: str | None,
    notes: str | None,
) -> None:
    """Receive stock or correct the on-hand count."""
    handler = AdjustInventoryHandler(
        inventory_repo=inventory_repository(settings),
        transaction_repo=transaction_repository(settings),
        transaction_prefix=settings.transaction_prefix,
    )

    try:
        snapshot = handler.handle(
            product_id,
            quantity,
            kind=kind,
            unit_cost=parse_unit_cost(unit_cost) if unit_cost else None,
            notes=notes,
            created_by=settings.actor,
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"'{snapshot.display_name}' now {snapshot.quantity_on_hand} on hand "
        f"({snapshot.quantity_available} available)"
    )


@click.command("reserve")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--ref", "reference_doc_id", default=None, help="Reference document ID.")
@click.option("--label", default=None, help="Human-readable reference label.")
@click.pass_obj
def inventory_reserve(
    settings: Settings, items: str, reference_doc_id: str | None, label: str | None
) -> None:
    """Reserve stock for an order or work order (safe to re-run)."""
    specs = _parse_items(items)
    handler = ReserveInventoryHandler(
        inventory_repo=inventory_repository(settings),
        transaction_repo=transaction_repository(settings),
        transaction_prefix=settings.transaction_prefix,
    )

    try:
        result = handler.handle(
            specs,
            reference_doc_id=reference_doc_id,
            reference_label=label,
            created_by=settings.actor,
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    for line in result.reserved:
        click.echo(f"  reserved      {line.product_id}: {line.quantity}")
    for line in result.insufficient:
        click.echo(
            f"  insufficient  {line.product_id}: need {line.required}, "
            f"{line.available} available",
            err=True,
        )
    _echo_missing(result.missing)
    if not result.ok:
        raise click.exceptions.Exit(2)


@click.command("consume")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--type",
    "consumption_type",
    type=click.Choice(["sold", "used"]),
    default="sold",
    show_default=True,
)
@click.option("--ref", "reference_doc_id", default=None, help="Reference document ID.")
@click.option("--label", default=None, help="Human-readable reference label.")
@click.pass_obj
def inventory_consume(
    settings: Settings,
    items: str,
    consumption_type: str,
    reference_doc_id: str | None,
    label: str | None,
) -> None:
    """Remove sold or used stock (safe to re-run for the same --ref)."""
    specs = _parse_items(items)
    handler = ConsumeInventoryHandler(
        inventory_repo=inventory_repository(settings),
        transaction_repo=transaction_repository(settings),
        transaction_prefix=settings.transaction_prefix,
    )

    try:
        result = handler.handle(
            specs,
            consumption_type=consumption_type,
            reference_doc_id=reference_doc_id,
            reference_label=label,
            created_by=settings.actor,
            mark_sold=consumption_type == "sold",
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    for line in result.consumed:
        click.echo(f"  {consumption_type:<13} {line.product_id}: {line.quantity}")
    for line in result.shortages:
        click.echo(
            f"  shortage      {line.product_id}: needed {line.required}, "
            f"{line.on_hand} on hand",
            err=True,
        )
    _echo_missing(result.missing)


@click.command("manufacture")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Finished units.")
@click.option("--ref", "reference_doc_id", default=None, help="Manufacturing order ID.")
@click.option("--label", default=None, help="Human-readable reference label.")
@click.pass_obj
def inventory_manufacture(
    settings: Settings,
    product_id: str,
    quantity: int,
    reference_doc_id: str | None,
    label: str | None,
) -> None:
    """Record a completed production run."""
    handler = RecordProductionHandler(
        inventory_repo=inventory_repository(settings),
        transaction_repo=transaction_repository(settings),
        transaction_prefix=settings.transaction_prefix,
    )

    try:
        result = handler.handle(
            product_id,
            quantity,
            reference_doc_id=reference_doc_id,
            reference_label=label,
            created_by=settings.actor,
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    if result.missing:
        _echo_missing(result.missing)
        raise click.exceptions.Exit(2)
    for line in result.produced:
        click.echo(f"  produced      {line.product_id}: {line.quantity}")


@click.command("schedule")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units committed to production.")
@click.pass_obj
def inventory_schedule(settings: Settings, product_id: str, quantity: int) -> None:
    """Commit units to a production run (in-production only)."""
    handler = ScheduleProductionHandler(
        inventory_repo=inventory_repository(settings),
        transaction_repo=transaction_repository(settings),
    )

    try:
        snapshot = handler.handle(product_id, quantity)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"'{snapshot.display_name}' now {snapshot.quantity_in_production} in production"
    )


@click.command("reorder-check")
@click.option(
    "--no-schedule",
    is_flag=True,
    default=False,
    help="Report only; do not schedule production runs.",
)
@click.pass_obj
def inventory_reorder_check(settings: Settings, no_schedule: bool) -> None:
    """Refresh low-stock alerts and report what needs replenishing."""
    handler = ReorderCheckHandler(
        inventory_repo=inventory_repository(settings),
        transaction_repo=transaction_repository(settings),
    )

    try:
        report = handler.handle(schedule_production=not no_schedule)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Processed {report.processed} records ({report.alerts_changed} alerts changed)")
    if report.production_scheduled:
        click.echo("Production scheduled:")
        for line in report.production_scheduled:
            click.echo(f"  - {line}")
    if report.purchase_alerts:
        click.echo("Purchase alerts:")
        for line in report.purchase_alerts:
            click.echo(f"  - {line}")
