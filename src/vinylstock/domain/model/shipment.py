"""Shipment aggregate — records received from a supplier.

A shipment owns its line items: one per record, each carrying the
received quantity.  Line items never exist without their shipment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from vinylstock.domain.exceptions import ValidationError
from vinylstock.domain.model.documents import clean_document_link, require_date
from vinylstock.domain.model.value_objects import Quantity


@dataclass
class ShipmentLineItem:
    """Association of one record with one shipment (composite key)."""

    record_id: int
    quantity: Quantity


@dataclass
class Shipment:
    """Aggregate root for supplier shipments.

    Use ``Shipment.create()`` for new shipments.  The repository
    reconstitutes persisted shipments through ``__init__`` directly.
    ``version`` is bumped on every committed change and is used to
    detect conflicting concurrent edits.
    """

    id: int | None
    supplier_id: int
    date: date
    invoice_link: str
    items: dict[int, ShipmentLineItem] = field(default_factory=dict)
    version: int = 0

    # --- Factory (used for NEW shipments only) --------------------------------

    @staticmethod
    def create(supplier_id: int, date: date, invoice_link: str) -> Shipment:
        shipment = Shipment(id=None, supplier_id=0, date=date, invoice_link="")
        shipment.update_header(supplier_id, date, invoice_link)
        return shipment

    # --- Header ---------------------------------------------------------------

    def update_header(self, supplier_id: int, date: date, invoice_link: str) -> None:
        if supplier_id is None or supplier_id <= 0:
            raise ValidationError("Supplier is required")
        self.date = require_date(date, "Shipment date")
        self.invoice_link = clean_document_link(invoice_link, "Invoice link")
        self.supplier_id = supplier_id

    # --- Line items -----------------------------------------------------------

    def add_item(self, record_id: int, quantity: int) -> None:
        if record_id in self.items:
            raise ValidationError(
                f"Record #{record_id} is already part of this shipment",
                record_ids=(record_id,),
            )
        self.items[record_id] = ShipmentLineItem(record_id, Quantity(quantity))

    def change_quantity(self, record_id: int, quantity: int) -> None:
        self._find_item(record_id).quantity = Quantity(quantity)

    def remove_item(self, record_id: int) -> ShipmentLineItem:
        item = self._find_item(record_id)
        del self.items[record_id]
        return item

    # --- Computed properties --------------------------------------------------

    @property
    def quantities(self) -> dict[int, int]:
        """Current line items as ``record_id -> quantity``."""
        return {rid: item.quantity.value for rid, item in self.items.items()}

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items.values())

    # --- Internal helpers -----------------------------------------------------

    def _find_item(self, record_id: int) -> ShipmentLineItem:
        item = self.items.get(record_id)
        if item is None:
            raise ValidationError(
                f"Record #{record_id} is not part of shipment #{self.id}",
                record_ids=(record_id,),
            )
        return item
