"""CLI commands for stock levels."""

from __future__ import annotations

import click

from vinylstock.application.show_stock import ShowStockHandler
from vinylstock.application.verify_stock_ledger import VerifyStockLedgerHandler
from vinylstock.infrastructure.cli.context import CliContext, domain_errors, pass_context


@click.command("show")
@click.option("--in-stock", is_flag=True, default=False, help="Only records available for sale.")
@pass_context
def stock_show(ctx: CliContext, in_stock: bool) -> None:
    """Show current stock levels."""
    handler = ShowStockHandler(ctx.unit_of_work())
    with domain_errors():
        lines = handler.handle(in_stock_only=in_stock)

    if not lines:
        click.echo("No records found.")
        return

    click.echo(f"{'ID':<5} {'Record':<30} {'Catalog #':<14} {'Price':>9} {'Stock':>6}  Status")
    click.echo("-" * 80)
    for line in lines:
        click.echo(
            f"{line.record_id:<5} {line.name[:30]:<30} {line.catalog_number[:14]:<14} "
            f"{line.price:>9} {line.quantity:>6}  {line.status}"
        )


@click.command("verify")
@pass_context
def stock_verify(ctx: CliContext) -> None:
    """Check stock against the live shipment and sale line items."""
    handler = VerifyStockLedgerHandler(ctx.unit_of_work())
    with domain_errors():
        discrepancies = handler.handle()

    if not discrepancies:
        click.echo("Stock ledger is consistent.")
        return

    click.echo(f"{'ID':<5} {'Record':<30} {'Expected':>9} {'Actual':>7} {'Diff':>6}")
    click.echo("-" * 61)
    for d in discrepancies:
        click.echo(
            f"{d.record_id:<5} {d.name[:30]:<30} {d.expected_quantity:>9} "
            f"{d.actual_quantity:>7} {d.difference:>+6}"
        )
    raise click.ClickException(f"{len(discrepancies)} record(s) out of balance")
