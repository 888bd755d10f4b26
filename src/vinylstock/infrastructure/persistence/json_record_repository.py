"""JSON-backed implementation of RecordRepository.

Works on the ``records`` table of a loaded store document; changes reach
disk only when the owning unit of work commits.
"""

from __future__ import annotations

from vinylstock.domain.model.record import Record
from vinylstock.domain.model.value_objects import Money
from vinylstock.domain.repository.record_repository import RecordRepository


class JsonRecordRepository(RecordRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    # --- RecordRepository interface -------------------------------------------

    def next_id(self) -> int:
        if not self._rows:
            return 1
        return max(r["id"] for r in self._rows) + 1

    def get_by_id(self, record_id: int) -> Record | None:
        for raw in self._rows:
            if raw["id"] == record_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Record]:
        return [self._to_domain(raw) for raw in sorted(self._rows, key=lambda r: r["id"])]

    def save(self, record: Record) -> None:
        if record.id is None:
            record.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(self._rows):
            if raw["id"] == record.id:
                self._rows[i] = self._to_raw(record)
                return
        self._rows.append(self._to_raw(record))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: Record) -> dict:
        return {
            "id": record.id,
            "artist_id": record.artist_id,
            "name": record.name,
            "year": record.year,
            "label": record.label,
            "catalog_number": record.catalog_number,
            "current_price": record.current_price.minor_units,
            "stock_quantity": record.stock_quantity,
            # Persisted for readers of the file; recomputed on every write.
            "status_id": record.status.value,
            "opening_quantity": record.opening_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Record:
        return Record(
            id=raw["id"],
            artist_id=raw["artist_id"],
            name=raw["name"],
            year=raw["year"],
            label=raw["label"],
            catalog_number=raw["catalog_number"],
            current_price=Money(raw["current_price"]),
            stock_quantity=raw["stock_quantity"],
            opening_quantity=raw.get("opening_quantity", 0),
        )
