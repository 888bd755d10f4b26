"""JSON-backed implementation of SaleRepository.

Headers live in the ``sales`` table, line items (quantity plus the
snapshot ``price`` in minor units) in ``sale_records``.  Ids of deleted
sales are never reused.
"""

from __future__ import annotations

from datetime import date

from vinylstock.domain.model.sale import Sale, SaleLineItem
from vinylstock.domain.model.value_objects import Money, Quantity
from vinylstock.domain.repository.sale_repository import SaleRepository
from vinylstock.infrastructure.persistence.json_line_items import JsonLineItemTable

_TABLE = "sales"


class JsonSaleRepository(SaleRepository):

    def __init__(
        self, header_rows: list[dict], line_rows: list[dict], next_ids: dict[str, int]
    ) -> None:
        self._rows = header_rows
        self._lines = JsonLineItemTable(line_rows, owner_key="sale_id")
        self._next_ids = next_ids

    # --- SaleRepository interface ---------------------------------------------

    def next_id(self) -> int:
        highest = max((r["id"] for r in self._rows), default=0)
        return max(self._next_ids.get(_TABLE, 1), highest + 1)

    def get_by_id(self, sale_id: int) -> Sale | None:
        for raw in self._rows:
            if raw["id"] == sale_id:
                return self._to_domain(raw, self._lines.read(sale_id))
        return None

    def list_all(self) -> list[Sale]:
        return [
            self._to_domain(raw, self._lines.read(raw["id"]))
            for raw in sorted(self._rows, key=lambda r: r["id"])
        ]

    def save(self, sale: Sale) -> None:
        if sale.id is None:
            sale.id = self.next_id()
            self._next_ids[_TABLE] = sale.id + 1
        sale.version += 1

        header = self._to_raw(sale)
        for i, raw in enumerate(self._rows):
            if raw["id"] == sale.id:
                self._rows[i] = header
                break
        else:
            self._rows.append(header)

        self._lines.sync(
            sale.id,
            {
                item.record_id: {
                    "sale_id": sale.id,
                    "record_id": item.record_id,
                    "quantity": item.quantity.value,
                    "price": item.unit_price.minor_units,
                }
                for item in sale.items.values()
            },
        )

    def delete(self, sale_id: int) -> None:
        self._lines.delete_all(sale_id)
        self._rows[:] = [r for r in self._rows if r["id"] != sale_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "date": sale.date.isoformat(),
            "receipt_link": sale.receipt_link,
            "version": sale.version,
        }

    @staticmethod
    def _to_domain(raw: dict, lines: dict[int, dict]) -> Sale:
        return Sale(
            id=raw["id"],
            date=date.fromisoformat(raw["date"]),
            receipt_link=raw["receipt_link"],
            items={
                record_id: SaleLineItem(
                    record_id,
                    Quantity(line["quantity"]),
                    Money(line["price"]),
                )
                for record_id, line in sorted(lines.items())
            },
            version=raw.get("version", 0),
        )
