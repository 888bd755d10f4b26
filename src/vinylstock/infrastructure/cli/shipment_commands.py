"""CLI commands for the Shipment aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from vinylstock.application.create_shipment import CreateShipmentHandler
from vinylstock.application.delete_shipment import DeleteShipmentHandler
from vinylstock.application.dto import ShipmentDTO, ShipmentHeaderSpec, ShipmentResultDTO
from vinylstock.application.edit_shipment import EditShipmentHandler
from vinylstock.application.show_shipment import ListShipmentsHandler, ShowShipmentHandler
from vinylstock.infrastructure.cli.context import (
    CliContext,
    domain_errors,
    echo_stock_changes,
    parse_items,
    pass_context,
)

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _header_options(func):
    func = click.option("--invoice-link", required=True, help="Link to the supplier invoice.")(func)
    func = click.option("--date", "shipment_date", required=True, type=_DATE, help="Date (YYYY-MM-DD).")(func)
    func = click.option("--supplier-id", required=True, type=int, help="Supplier ID.")(func)
    return func


def _display_shipment(dto: ShipmentDTO) -> None:
    """Shared formatting for displaying a shipment."""
    click.echo(f"Shipment #{dto.id}  (version {dto.version})")
    click.echo(f"Supplier: #{dto.supplier_id}")
    click.echo(f"Date:     {dto.date}")
    click.echo(f"Invoice:  {dto.invoice_link}")
    click.echo()
    click.echo(f"  {'ID':<5} {'Record':<30} {'Qty':>5}")
    click.echo(f"  {'-'*42}")
    for item in dto.items:
        click.echo(f"  {item.record_id:<5} {item.record_name[:30]:<30} {item.quantity:>5}")
    click.echo(f"  {'-'*42}")
    click.echo(f"  {'Total units':<36} {dto.total_quantity:>5}")


def _display_result(result: ShipmentResultDTO) -> None:
    for record_id, requested in result.skipped.items():
        click.echo(f"Skipped record #{record_id}: quantity {requested!r} is not positive")
    echo_stock_changes(result.stock_changes)


@click.command("create")
@_header_options
@click.option("--items", required=True, help="Items as 'RecordId:Qty,RecordId:Qty'.")
@pass_context
def shipment_create(
    ctx: CliContext, supplier_id: int, shipment_date: datetime, invoice_link: str, items: str
) -> None:
    """Record a shipment received from a supplier."""
    selection, quantities = parse_items(items)
    header = ShipmentHeaderSpec(supplier_id, shipment_date.date(), invoice_link)
    handler = CreateShipmentHandler(ctx.unit_of_work())

    with domain_errors():
        result = handler.handle(header, selection, quantities)

    click.echo(f"Shipment #{result.shipment.id} created.")
    _display_result(result)


@click.command("edit")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID to edit.")
@_header_options
@click.option("--items", required=True, help="The complete new selection as 'RecordId:Qty,...'.")
@click.option("--version", "expected_version", type=int, required=True,
              help="Version shown by `shipment show`; stale edits are rejected.")
@pass_context
def shipment_edit(
    ctx: CliContext,
    shipment_id: int,
    supplier_id: int,
    shipment_date: datetime,
    invoice_link: str,
    items: str,
    expected_version: int,
) -> None:
    """Edit a shipment; only the net change per record reaches stock."""
    selection, quantities = parse_items(items)
    header = ShipmentHeaderSpec(supplier_id, shipment_date.date(), invoice_link)
    handler = EditShipmentHandler(ctx.unit_of_work())

    with domain_errors():
        result = handler.handle(
            shipment_id, header, selection, quantities, expected_version=expected_version
        )

    click.echo(f"Shipment #{shipment_id} saved (version {result.shipment.version}).")
    _display_result(result)


@click.command("delete")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID to delete.")
@pass_context
def shipment_delete(ctx: CliContext, shipment_id: int) -> None:
    """Delete a shipment and take its units back out of stock."""
    handler = DeleteShipmentHandler(ctx.unit_of_work())

    with domain_errors():
        result = handler.handle(shipment_id)

    if not result.found:
        click.echo(f"Shipment #{shipment_id} does not exist; nothing deleted.")
        return
    click.echo(f"Shipment #{shipment_id} deleted.")
    echo_stock_changes(result.stock_changes)


@click.command("show")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID to display.")
@pass_context
def shipment_show(ctx: CliContext, shipment_id: int) -> None:
    """Show details of a shipment."""
    handler = ShowShipmentHandler(ctx.unit_of_work())

    with domain_errors():
        dto = handler.handle(shipment_id)

    _display_shipment(dto)


@click.command("list")
@pass_context
def shipment_list(ctx: CliContext) -> None:
    """List all shipments."""
    handler = ListShipmentsHandler(ctx.unit_of_work())
    with domain_errors():
        shipments = handler.handle()

    if not shipments:
        click.echo("No shipments found.")
        return

    click.echo(f"{'ID':<6} {'Date':<11} {'Supplier':>8} {'Lines':>6} {'Units':>6}")
    click.echo("-" * 41)
    for s in shipments:
        click.echo(f"{s.id:<6} {s.date:<11} {s.supplier_id:>8} {len(s.items):>6} {s.total_quantity:>6}")
