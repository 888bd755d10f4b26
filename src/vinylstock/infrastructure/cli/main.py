import click

from vinylstock.infrastructure.bootstrap import DATA_DIR_ENV, data_dir
from vinylstock.infrastructure.cli.context import CliContext
from vinylstock.infrastructure.cli.record_commands import record_add, record_update_price
from vinylstock.infrastructure.cli.sale_commands import (
    sale_create,
    sale_delete,
    sale_edit,
    sale_list,
    sale_show,
)
from vinylstock.infrastructure.cli.shipment_commands import (
    shipment_create,
    shipment_delete,
    shipment_edit,
    shipment_list,
    shipment_show,
)
from vinylstock.infrastructure.cli.stock_commands import stock_show, stock_verify
from vinylstock.infrastructure.logging_setup import setup_logging


@click.group()
@click.option(
    "--data-dir",
    "data_dir_path",
    envvar=DATA_DIR_ENV,
    type=click.Path(file_okay=False),
    default=None,
    help=f"Directory holding the store (env: {DATA_DIR_ENV}).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Also log to stderr.")
@click.pass_context
def cli(ctx: click.Context, data_dir_path: str | None, verbose: bool) -> None:
    """vinylstock — stock ledger for a vinyl record store"""
    directory = data_dir(data_dir_path)
    setup_logging(directory, verbose=verbose)
    ctx.obj = CliContext(data_dir=directory)


@cli.group()
def record() -> None:
    """Manage the record catalog."""


@cli.group()
def shipment() -> None:
    """Manage supplier shipments."""


@cli.group()
def sale() -> None:
    """Manage sales."""


@cli.group()
def stock() -> None:
    """Inspect stock levels."""


# Register subcommands
record.add_command(record_add)
record.add_command(record_update_price)
shipment.add_command(shipment_create)
shipment.add_command(shipment_delete)
shipment.add_command(shipment_edit)
shipment.add_command(shipment_list)
shipment.add_command(shipment_show)
sale.add_command(sale_create)
sale.add_command(sale_delete)
sale.add_command(sale_edit)
sale.add_command(sale_list)
sale.add_command(sale_show)
stock.add_command(stock_show)
stock.add_command(stock_verify)
