"""CLI commands for the record catalog."""

from __future__ import annotations

import click

from vinylstock.application.add_record import AddRecordHandler
from vinylstock.application.update_record_price import UpdateRecordPriceHandler
from vinylstock.infrastructure.cli.context import CliContext, domain_errors, pass_context


@click.command("add")
@click.option("--name", required=True, help="Album title.")
@click.option("--artist-id", required=True, type=int, help="Artist ID.")
@click.option("--year", required=True, type=int, help="Release year.")
@click.option("--label", required=True, help="Record label.")
@click.option("--catalog-number", required=True, help="Catalog number.")
@click.option("--price", required=True, help="Current price (e.g. 24.99).")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@pass_context
def record_add(
    ctx: CliContext,
    name: str,
    artist_id: int,
    year: int,
    label: str,
    catalog_number: str,
    price: str,
    stock: int,
) -> None:
    """Add a record to the catalog."""
    handler = AddRecordHandler(ctx.unit_of_work())

    with domain_errors():
        record = handler.handle(
            artist_id=artist_id,
            name=name,
            year=year,
            label=label,
            catalog_number=catalog_number,
            price=price,
            stock_quantity=stock,
        )

    click.echo(
        f"Record #{record.id} '{record.name}' added at {record.current_price} "
        f"({record.stock_quantity} in stock, {record.status.label})"
    )


@click.command("update-price")
@click.option("--id", "record_id", required=True, type=int, help="Record ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@pass_context
def record_update_price(ctx: CliContext, record_id: int, price: str) -> None:
    """Update a record's current price (existing sales keep theirs)."""
    handler = UpdateRecordPriceHandler(ctx.unit_of_work())

    with domain_errors():
        handler.handle(record_id=record_id, new_price=price)

    click.echo(f"Record #{record_id} price updated to {price}")
