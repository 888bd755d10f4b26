"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


# --- Input -------------------------------------------------------------------


@dataclass(frozen=True)
class ShipmentHeaderSpec:
    """Input: the header fields of a shipment."""

    supplier_id: int
    date: date
    invoice_link: str


@dataclass(frozen=True)
class SaleHeaderSpec:
    """Input: the header fields of a sale."""

    date: date
    receipt_link: str


# --- Output ------------------------------------------------------------------


@dataclass(frozen=True)
class StockChangeDTO:
    """Output: one stock movement caused by an operation."""

    record_id: int
    record_name: str
    delta: int
    quantity: int
    status: str


@dataclass(frozen=True)
class LineItemChangesDTO:
    """Output: which line items an operation inserted, updated or deleted."""

    inserted: tuple[int, ...] = ()
    updated: tuple[int, ...] = ()
    deleted: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.inserted or self.updated or self.deleted)


@dataclass(frozen=True)
class ShipmentLineItemDTO:
    record_id: int
    record_name: str
    quantity: int


@dataclass(frozen=True)
class ShipmentDTO:
    id: int
    supplier_id: int
    date: str
    invoice_link: str
    version: int
    items: list[ShipmentLineItemDTO]
    total_quantity: int


@dataclass(frozen=True)
class SaleLineItemDTO:
    record_id: int
    record_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "24.99"
    line_total: str


@dataclass(frozen=True)
class SaleDTO:
    id: int
    date: str
    receipt_link: str
    version: int
    items: list[SaleLineItemDTO]
    total: str


@dataclass(frozen=True)
class ShipmentResultDTO:
    """Output of a shipment create or edit.

    ``skipped`` maps each selected record that was left out because it
    had no positive quantity to the quantity that was requested for it.
    """

    shipment: ShipmentDTO
    stock_changes: list[StockChangeDTO]
    line_items: LineItemChangesDTO
    skipped: dict[int, int | None] = field(default_factory=dict)


@dataclass(frozen=True)
class SaleResultDTO:
    """Output of a sale create or edit."""

    sale: SaleDTO
    stock_changes: list[StockChangeDTO]
    line_items: LineItemChangesDTO


@dataclass(frozen=True)
class DeletionDTO:
    """Output of a delete.  ``found`` is False when there was nothing to delete."""

    found: bool
    stock_changes: list[StockChangeDTO] = field(default_factory=list)
