"""Shared plumbing for the CLI commands: context object, item parsing,
and translation of domain errors into click errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click

from vinylstock.domain.exceptions import ConcurrencyConflictError, DomainException
from vinylstock.infrastructure.bootstrap import unit_of_work
from vinylstock.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

CONFLICT_EXIT_CODE = 3


@dataclass
class CliContext:
    data_dir: Path

    def unit_of_work(self) -> JsonUnitOfWork:
        return unit_of_work(self.data_dir)


pass_context = click.make_pass_decorator(CliContext)


class ConflictError(click.ClickException):
    """Another writer got there first; the user should reload and retry."""

    exit_code = CONFLICT_EXIT_CODE


@contextmanager
def domain_errors() -> Iterator[None]:
    try:
        yield
    except ConcurrencyConflictError as exc:
        raise ConflictError(str(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))


def parse_items(raw: str) -> tuple[list[int], dict[int, int]]:
    """Parse '12:3,7:1,9' into a selection and a quantity mapping.

    An id without ':QTY' is selected with no quantity.
    """
    selection: list[int] = []
    quantities: dict[int, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        id_str, sep, qty_str = pair.partition(":")
        try:
            record_id = int(id_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid record id '{id_str}'. Expected 'RecordId:Quantity'."
            )
        if record_id in quantities or record_id in selection:
            raise click.BadParameter(f"Record #{record_id} is listed more than once.")
        selection.append(record_id)
        if sep:
            try:
                quantities[record_id] = int(qty_str)
            except ValueError:
                raise click.BadParameter(
                    f"Invalid quantity '{qty_str}' for record #{record_id}."
                )
    return selection, quantities


def echo_stock_changes(changes) -> None:
    if not changes:
        click.echo("Stock unchanged.")
        return
    click.echo(f"  {'Record':<30} {'Change':>7} {'Stock':>6}  Status")
    click.echo(f"  {'-'*58}")
    for change in changes:
        click.echo(
            f"  {change.record_name[:30]:<30} {change.delta:>+7} {change.quantity:>6}  {change.status}"
        )
