"""JSON-backed implementation of ShipmentRepository.

Headers live in the ``shipments`` table, line items in
``shipment_records``.  New ids come from the store's ``next_ids``
counter, so the id of a deleted shipment is never reused.
"""

from __future__ import annotations

from datetime import date

from vinylstock.domain.model.shipment import Shipment, ShipmentLineItem
from vinylstock.domain.model.value_objects import Quantity
from vinylstock.domain.repository.shipment_repository import ShipmentRepository
from vinylstock.infrastructure.persistence.json_line_items import JsonLineItemTable

_TABLE = "shipments"


class JsonShipmentRepository(ShipmentRepository):

    def __init__(
        self, header_rows: list[dict], line_rows: list[dict], next_ids: dict[str, int]
    ) -> None:
        self._rows = header_rows
        self._lines = JsonLineItemTable(line_rows, owner_key="shipment_id")
        self._next_ids = next_ids

    # --- ShipmentRepository interface -----------------------------------------

    def next_id(self) -> int:
        highest = max((r["id"] for r in self._rows), default=0)
        return max(self._next_ids.get(_TABLE, 1), highest + 1)

    def get_by_id(self, shipment_id: int) -> Shipment | None:
        for raw in self._rows:
            if raw["id"] == shipment_id:
                return self._to_domain(raw, self._lines.read(shipment_id))
        return None

    def list_all(self) -> list[Shipment]:
        return [
            self._to_domain(raw, self._lines.read(raw["id"]))
            for raw in sorted(self._rows, key=lambda r: r["id"])
        ]

    def save(self, shipment: Shipment) -> None:
        if shipment.id is None:
            shipment.id = self.next_id()
            self._next_ids[_TABLE] = shipment.id + 1
        shipment.version += 1

        header = self._to_raw(shipment)
        for i, raw in enumerate(self._rows):
            if raw["id"] == shipment.id:
                self._rows[i] = header
                break
        else:
            self._rows.append(header)

        self._lines.sync(
            shipment.id,
            {
                item.record_id: {
                    "shipment_id": shipment.id,
                    "record_id": item.record_id,
                    "quantity": item.quantity.value,
                }
                for item in shipment.items.values()
            },
        )

    def delete(self, shipment_id: int) -> None:
        self._lines.delete_all(shipment_id)
        self._rows[:] = [r for r in self._rows if r["id"] != shipment_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(shipment: Shipment) -> dict:
        return {
            "id": shipment.id,
            "supplier_id": shipment.supplier_id,
            "date": shipment.date.isoformat(),
            "invoice_link": shipment.invoice_link,
            "version": shipment.version,
        }

    @staticmethod
    def _to_domain(raw: dict, lines: dict[int, dict]) -> Shipment:
        return Shipment(
            id=raw["id"],
            supplier_id=raw["supplier_id"],
            date=date.fromisoformat(raw["date"]),
            invoice_link=raw["invoice_link"],
            items={
                record_id: ShipmentLineItem(record_id, Quantity(line["quantity"]))
                for record_id, line in sorted(lines.items())
            },
            version=raw.get("version", 0),
        )
