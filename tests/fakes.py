"""In-memory fakes for testing.

The fake repositories implement the same abstract interfaces as the JSON
repositories but keep everything in dicts.  FakeUnitOfWork hands them a
private copy of a shared FakeDatabase and writes the copy back only on
commit, so rollback behaves like the real thing.
"""

from __future__ import annotations

import copy

from vinylstock.domain.model.record import Record
from vinylstock.domain.model.sale import Sale
from vinylstock.domain.model.shipment import Shipment
from vinylstock.domain.model.value_objects import Money
from vinylstock.domain.repository.record_repository import RecordRepository
from vinylstock.domain.repository.sale_repository import SaleRepository
from vinylstock.domain.repository.shipment_repository import ShipmentRepository
from vinylstock.domain.repository.unit_of_work import UnitOfWork


class FakeRecordRepository(RecordRepository):

    def __init__(self, records: list[Record] | None = None) -> None:
        self._store: dict[int, Record] = {}
        for r in records or []:
            self._store[r.id] = r

    def next_id(self) -> int:
        return max(self._store, default=0) + 1

    def get_by_id(self, record_id: int) -> Record | None:
        return self._store.get(record_id)

    def list_all(self) -> list[Record]:
        return [self._store[rid] for rid in sorted(self._store)]

    def save(self, record: Record) -> None:
        if record.id is None:
            record.id = self.next_id()
        self._store[record.id] = record


class _FakeAggregateRepository:

    table = ""

    def __init__(self, aggregates=None, next_ids: dict[str, int] | None = None) -> None:
        self._store: dict = {}
        for a in aggregates or []:
            self._store[a.id] = a
        self._next_ids = next_ids if next_ids is not None else {}

    def next_id(self) -> int:
        return max(self._next_ids.get(self.table, 1), max(self._store, default=0) + 1)

    def get_by_id(self, aggregate_id: int):
        return self._store.get(aggregate_id)

    def list_all(self) -> list:
        return [self._store[i] for i in sorted(self._store)]

    def save(self, aggregate) -> None:
        if aggregate.id is None:
            aggregate.id = self.next_id()
            self._next_ids[self.table] = aggregate.id + 1
        aggregate.version += 1
        self._store[aggregate.id] = aggregate

    def delete(self, aggregate_id: int) -> None:
        self._store.pop(aggregate_id, None)


class FakeShipmentRepository(_FakeAggregateRepository, ShipmentRepository):
    table = "shipments"


class FakeSaleRepository(_FakeAggregateRepository, SaleRepository):
    table = "sales"


class FakeDatabase:
    """The committed state shared by every FakeUnitOfWork built on it."""

    def __init__(self, records: list[Record] | None = None) -> None:
        self.records: dict[int, Record] = {r.id: r for r in records or []}
        self.shipments: dict[int, Shipment] = {}
        self.sales: dict[int, Sale] = {}
        self.next_ids: dict[str, int] = {}


class FakeUnitOfWork(UnitOfWork):
    """Works on a private copy of the database; commit writes it back whole.

    Like the JSON unit of work, the only conflict detection is the version
    check the handlers make against the loaded aggregate.
    """

    def __init__(self, db: FakeDatabase | None = None) -> None:
        self.db = db or FakeDatabase()
        self.commits = 0
        self._active = False
        self._begin()

    def __enter__(self) -> FakeUnitOfWork:
        self._begin()
        return self

    def commit(self) -> None:
        self.db.records = copy.deepcopy(self.records._store)
        self.db.shipments = copy.deepcopy(self.shipments._store)
        self.db.sales = copy.deepcopy(self.sales._store)
        self.db.next_ids = dict(self._next_ids)
        self.commits += 1
        self._active = False

    def rollback(self) -> None:
        self._active = False

    def _begin(self) -> None:
        self._next_ids = dict(self.db.next_ids)
        self.records = FakeRecordRepository(list(copy.deepcopy(self.db.records).values()))
        self.shipments = FakeShipmentRepository(
            list(copy.deepcopy(self.db.shipments).values()), self._next_ids
        )
        self.sales = FakeSaleRepository(
            list(copy.deepcopy(self.db.sales).values()), self._next_ids
        )
        self._active = True


# --- Builders -----------------------------------------------------------------


def make_record(
    record_id: int,
    name: str = "Record",
    stock: int = 0,
    price: str = "25.00",
) -> Record:
    return Record(
        id=record_id,
        artist_id=1,
        name=name,
        year=1975,
        label="Test Label",
        catalog_number=f"CAT-{record_id:03d}",
        current_price=Money.of(price),
        stock_quantity=stock,
        opening_quantity=stock,
    )


def stock_of(db: FakeDatabase, record_id: int) -> int:
    return db.records[record_id].stock_quantity
