"""CLI commands for the Sale aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from vinylstock.application.create_sale import CreateSaleHandler
from vinylstock.application.delete_sale import DeleteSaleHandler
from vinylstock.application.dto import SaleDTO, SaleHeaderSpec
from vinylstock.application.edit_sale import EditSaleHandler
from vinylstock.application.show_sale import ListSalesHandler, ShowSaleHandler
from vinylstock.infrastructure.cli.context import (
    CliContext,
    domain_errors,
    echo_stock_changes,
    parse_items,
    pass_context,
)

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a sale."""
    click.echo(f"Sale #{dto.id}  (version {dto.version})")
    click.echo(f"Date:     {dto.date}")
    click.echo(f"Receipt:  {dto.receipt_link}")
    click.echo()
    click.echo(f"  {'ID':<5} {'Record':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        click.echo(
            f"  {item.record_id:<5} {item.record_name[:30]:<30} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Sale Total':<41} {dto.total:>22}")


@click.command("create")
@click.option("--date", "sale_date", required=True, type=_DATE, help="Date (YYYY-MM-DD).")
@click.option("--receipt-link", required=True, help="Link to the receipt.")
@click.option("--items", required=True, help="Items as 'RecordId:Qty,RecordId:Qty'.")
@pass_context
def sale_create(ctx: CliContext, sale_date: datetime, receipt_link: str, items: str) -> None:
    """Record a sale (fails as a whole if any record is short)."""
    selection, quantities = parse_items(items)
    handler = CreateSaleHandler(ctx.unit_of_work())

    with domain_errors():
        result = handler.handle(
            SaleHeaderSpec(sale_date.date(), receipt_link), selection, quantities
        )

    click.echo(f"Sale #{result.sale.id} created.")
    _display_sale(result.sale)
    echo_stock_changes(result.stock_changes)


@click.command("edit")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to edit.")
@click.option("--date", "sale_date", required=True, type=_DATE, help="Date (YYYY-MM-DD).")
@click.option("--receipt-link", required=True, help="Link to the receipt.")
@click.option("--items", required=True, help="The complete new selection as 'RecordId:Qty,...'.")
@click.option("--version", "expected_version", type=int, required=True,
              help="Version shown by `sale show`; stale edits are rejected.")
@pass_context
def sale_edit(
    ctx: CliContext,
    sale_id: int,
    sale_date: datetime,
    receipt_link: str,
    items: str,
    expected_version: int,
) -> None:
    """Edit a sale; only the net change per record reaches stock."""
    selection, quantities = parse_items(items)
    handler = EditSaleHandler(ctx.unit_of_work())

    with domain_errors():
        result = handler.handle(
            sale_id,
            SaleHeaderSpec(sale_date.date(), receipt_link),
            selection,
            quantities,
            expected_version=expected_version,
        )

    click.echo(f"Sale #{sale_id} saved (version {result.sale.version}).")
    echo_stock_changes(result.stock_changes)


@click.command("delete")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to delete.")
@pass_context
def sale_delete(ctx: CliContext, sale_id: int) -> None:
    """Delete a sale and return its units to stock."""
    handler = DeleteSaleHandler(ctx.unit_of_work())

    with domain_errors():
        result = handler.handle(sale_id)

    if not result.found:
        click.echo(f"Sale #{sale_id} does not exist; nothing deleted.")
        return
    click.echo(f"Sale #{sale_id} deleted.")
    echo_stock_changes(result.stock_changes)


@click.command("show")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to display.")
@pass_context
def sale_show(ctx: CliContext, sale_id: int) -> None:
    """Show details of a sale."""
    handler = ShowSaleHandler(ctx.unit_of_work())

    with domain_errors():
        dto = handler.handle(sale_id)

    _display_sale(dto)


@click.command("list")
@pass_context
def sale_list(ctx: CliContext) -> None:
    """List all sales."""
    handler = ListSalesHandler(ctx.unit_of_work())
    with domain_errors():
        sales = handler.handle()

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"{'ID':<6} {'Date':<11} {'Lines':>6} {'Total':>12}")
    click.echo("-" * 38)
    for s in sales:
        click.echo(f"{s.id:<6} {s.date:<11} {len(s.items):>6} {s.total:>12}")
