"""Sale aggregate — records sold to customers.

Each line item captures the unit price of its record at the moment the
line item is created (price snapshot).  Later price changes on the record
never reach an existing line item, and neither does a quantity change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from vinylstock.domain.exceptions import ValidationError
from vinylstock.domain.model.documents import clean_document_link, require_date
from vinylstock.domain.model.value_objects import Money, Quantity


@dataclass
class SaleLineItem:
    record_id: int
    quantity: Quantity
    unit_price: Money  # locked when the line item is inserted

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Sale:
    """Aggregate root for customer sales.

    A sale always contains at least one line item once it is persisted.
    """

    id: int | None
    date: date
    receipt_link: str
    items: dict[int, SaleLineItem] = field(default_factory=dict)
    version: int = 0

    # --- Factory (used for NEW sales only) ------------------------------------

    @staticmethod
    def create(date: date, receipt_link: str) -> Sale:
        sale = Sale(id=None, date=date, receipt_link="")
        sale.update_header(date, receipt_link)
        return sale

    # --- Header ---------------------------------------------------------------

    def update_header(self, date: date, receipt_link: str) -> None:
        self.date = require_date(date, "Sale date")
        self.receipt_link = clean_document_link(receipt_link, "Receipt link")

    # --- Line items -----------------------------------------------------------

    def add_item(self, record_id: int, quantity: int, unit_price: Money) -> None:
        if record_id in self.items:
            raise ValidationError(
                f"Record #{record_id} is already part of this sale",
                record_ids=(record_id,),
            )
        self.items[record_id] = SaleLineItem(record_id, Quantity(quantity), unit_price)

    def change_quantity(self, record_id: int, quantity: int) -> None:
        """Change the sold quantity; the price snapshot is kept as is."""
        self._find_item(record_id).quantity = Quantity(quantity)

    def remove_item(self, record_id: int) -> SaleLineItem:
        item = self._find_item(record_id)
        del self.items[record_id]
        return item

    # --- Computed properties --------------------------------------------------

    @property
    def quantities(self) -> dict[int, int]:
        return {rid: item.quantity.value for rid, item in self.items.items()}

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items.values():
            result = result + item.line_total
        return result

    # --- Internal helpers -----------------------------------------------------

    def _find_item(self, record_id: int) -> SaleLineItem:
        item = self.items.get(record_id)
        if item is None:
            raise ValidationError(
                f"Record #{record_id} is not part of sale #{self.id}",
                record_ids=(record_id,),
            )
        return item
