"""Tests for the JSON store, repositories and unit of work."""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from vinylstock.application.create_sale import CreateSaleHandler
from vinylstock.application.create_shipment import CreateShipmentHandler
from vinylstock.application.delete_sale import DeleteSaleHandler
from vinylstock.application.delete_shipment import DeleteShipmentHandler
from vinylstock.application.dto import SaleHeaderSpec, ShipmentHeaderSpec
from vinylstock.application.edit_sale import EditSaleHandler
from vinylstock.domain.exceptions import EntityNotFoundError, InsufficientStockError
from vinylstock.domain.model.status import StockStatus
from vinylstock.infrastructure.persistence.json_line_items import JsonLineItemTable
from vinylstock.infrastructure.persistence.json_store import SEQUENCES, TABLES, JsonStore
from vinylstock.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from tests.fakes import make_record

SHIP = ShipmentHeaderSpec(supplier_id=1, date=date(2024, 4, 1), invoice_link="inv/1")
SELL = SaleHeaderSpec(date=date(2024, 4, 2), receipt_link="r/1")


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "vinylstock.json"
    with JsonUnitOfWork(path) as uow:
        uow.records.save(make_record(1, name="A", stock=0, price="10.00"))
        uow.records.save(make_record(2, name="B", stock=5, price="12.00"))
        uow.commit()
    return path


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def _stock(path, record_id):
    return next(r["stock_quantity"] for r in _read(path)["records"] if r["id"] == record_id)


class TestJsonStore:

    def test_new_store_has_every_table(self, tmp_path):
        path = tmp_path / "nested" / "store.json"

        JsonStore(path)

        expected = {table: [] for table in TABLES}
        expected[SEQUENCES] = {}
        assert _read(path) == expected

    def test_write_leaves_no_temp_files(self, tmp_path):
        store = JsonStore(tmp_path / "store.json")
        doc = store.load()
        doc["records"].append({"id": 1})

        store.write(doc)

        assert store.load()["records"] == [{"id": 1}]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["store.json", "store.json.lock"]


class TestUnitOfWork:

    def test_commit_persists_records_with_status(self, store_path):
        rows = {r["id"]: r for r in _read(store_path)["records"]}

        assert rows[1]["status_id"] == StockStatus.OUT_OF_STOCK.value
        assert rows[2]["status_id"] == StockStatus.IN_STOCK.value
        assert rows[2]["current_price"] == 1200

    def test_leaving_without_commit_discards_changes(self, store_path):
        with JsonUnitOfWork(store_path) as uow:
            record = uow.records.get_by_id(2)
            record.apply_delta(-5)
            uow.records.save(record)

        assert _stock(store_path, 2) == 5

    def test_failed_sale_leaves_file_untouched(self, store_path):
        before = store_path.read_bytes()

        with pytest.raises(InsufficientStockError):
            CreateSaleHandler(JsonUnitOfWork(store_path)).handle(SELL, [2], {2: 6})

        assert store_path.read_bytes() == before

    def test_shipment_round_trip(self, store_path):
        CreateShipmentHandler(JsonUnitOfWork(store_path)).handle(SHIP, [1, 2], {1: 3, 2: 1})

        doc = _read(store_path)
        assert doc["shipments"][0]["version"] == 1
        assert sorted((r["record_id"], r["quantity"]) for r in doc["shipment_records"]) == [
            (1, 3), (2, 1),
        ]
        with JsonUnitOfWork(store_path) as uow:
            shipment = uow.shipments.get_by_id(1)
            assert shipment.quantities == {1: 3, 2: 1}
            assert shipment.date == date(2024, 4, 1)
            assert uow.records.get_by_id(1).stock_quantity == 3

    def test_sale_rows_keep_price_snapshot(self, store_path):
        CreateSaleHandler(JsonUnitOfWork(store_path)).handle(SELL, [2], {2: 2})

        [line] = _read(store_path)["sale_records"]
        assert line == {"sale_id": 1, "record_id": 2, "quantity": 2, "price": 1200}


class TestIds:

    def test_deleted_ids_are_not_reused(self, store_path):
        first = CreateShipmentHandler(JsonUnitOfWork(store_path)).handle(SHIP, [1], {1: 1})
        DeleteShipmentHandler(JsonUnitOfWork(store_path)).handle(first.shipment.id)

        second = CreateShipmentHandler(JsonUnitOfWork(store_path)).handle(SHIP, [1], {1: 1})

        assert second.shipment.id == first.shipment.id + 1
        assert _read(store_path)[SEQUENCES]["shipments"] == second.shipment.id + 1

    def test_stale_sale_edit_after_delete_is_not_found(self, store_path):
        sold = CreateSaleHandler(JsonUnitOfWork(store_path)).handle(SELL, [2], {2: 1}).sale
        DeleteSaleHandler(JsonUnitOfWork(store_path)).handle(sold.id)
        CreateSaleHandler(JsonUnitOfWork(store_path)).handle(SELL, [2], {2: 2})

        with pytest.raises(EntityNotFoundError):
            EditSaleHandler(JsonUnitOfWork(store_path)).handle(
                sold.id, SELL, [2], {2: 5}, expected_version=sold.version
            )

        assert _stock(store_path, 2) == 3


class TestConcurrentWriters:

    def test_parallel_sales_never_oversell(self, store_path):
        def sell_one(_):
            try:
                CreateSaleHandler(JsonUnitOfWork(store_path)).handle(SELL, [2], {2: 1})
            except InsufficientStockError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(sell_one, range(8)))

        doc = _read(store_path)
        assert outcomes.count(True) == 5
        assert _stock(store_path, 2) == 0
        assert sorted(s["id"] for s in doc["sales"]) == [1, 2, 3, 4, 5]
        assert len(doc["sale_records"]) == 5


class TestLineItemTable:

    def test_sync_writes_only_differences(self):
        rows = [
            {"sale_id": 1, "record_id": 1, "quantity": 2},
            {"sale_id": 2, "record_id": 1, "quantity": 5},
            {"sale_id": 1, "record_id": 2, "quantity": 1},
        ]
        table = JsonLineItemTable(rows, owner_key="sale_id")

        counts = table.sync(1, {
            2: {"sale_id": 1, "record_id": 2, "quantity": 4},
            3: {"sale_id": 1, "record_id": 3, "quantity": 1},
        })

        assert counts == (1, 1, 1)
        assert table.read(1) == {
            2: {"sale_id": 1, "record_id": 2, "quantity": 4},
            3: {"sale_id": 1, "record_id": 3, "quantity": 1},
        }
        assert table.read(2) == {1: {"sale_id": 2, "record_id": 1, "quantity": 5}}

    def test_unchanged_rows_are_not_rewritten(self):
        row = {"sale_id": 1, "record_id": 1, "quantity": 2}
        table = JsonLineItemTable([row], owner_key="sale_id")

        counts = table.sync(1, {1: {"sale_id": 1, "record_id": 1, "quantity": 2}})

        assert counts == (0, 0, 0)
        assert table.read(1)[1] is row

    def test_duplicate_rows_are_refused(self):
        rows = [{"sale_id": 1, "record_id": 1}, {"sale_id": 1, "record_id": 1}]

        with pytest.raises(KeyError):
            JsonLineItemTable(rows, owner_key="sale_id").sync(1, {})
