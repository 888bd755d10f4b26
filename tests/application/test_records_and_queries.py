"""Integration tests for the catalog and read-only use cases."""

from datetime import date

import pytest

from vinylstock.application.add_record import AddRecordHandler
from vinylstock.application.create_sale import CreateSaleHandler
from vinylstock.application.create_shipment import CreateShipmentHandler
from vinylstock.application.dto import SaleHeaderSpec, ShipmentHeaderSpec
from vinylstock.application.show_sale import ListSalesHandler, ShowSaleHandler
from vinylstock.application.show_shipment import ListShipmentsHandler, ShowShipmentHandler
from vinylstock.application.show_stock import ShowStockHandler
from vinylstock.application.update_record_price import UpdateRecordPriceHandler
from vinylstock.domain.exceptions import EntityNotFoundError, ValidationError
from vinylstock.domain.model.status import StockStatus
from vinylstock.domain.model.value_objects import Money
from tests.fakes import FakeDatabase, FakeUnitOfWork, make_record


class TestAddRecord:

    def test_record_gets_id_and_derived_status(self):
        db = FakeDatabase([make_record(1)])

        record = AddRecordHandler(FakeUnitOfWork(db)).handle(
            artist_id=3, name="Hunky Dory", year=1971, label="RCA",
            catalog_number="SF 8244", price="27.50", stock_quantity=4,
        )

        assert record.id == 2
        assert db.records[2].status is StockStatus.IN_STOCK
        assert db.records[2].current_price == Money.of("27.50")
        assert db.records[2].opening_quantity == 4

    def test_invalid_record_is_not_saved(self):
        db = FakeDatabase()

        with pytest.raises(ValidationError):
            AddRecordHandler(FakeUnitOfWork(db)).handle(
                artist_id=3, name="", year=1971, label="RCA",
                catalog_number="SF 8244", price="27.50",
            )

        assert db.records == {}


class TestUpdateRecordPrice:

    def test_price_is_replaced(self):
        db = FakeDatabase([make_record(1, price="10.00")])

        UpdateRecordPriceHandler(FakeUnitOfWork(db)).handle(1, "12.49")

        assert db.records[1].current_price == Money.of("12.49")

    def test_unknown_record(self):
        with pytest.raises(EntityNotFoundError):
            UpdateRecordPriceHandler(FakeUnitOfWork()).handle(5, "1.00")

    def test_invalid_price(self):
        db = FakeDatabase([make_record(1, price="10.00")])

        with pytest.raises(ValidationError):
            UpdateRecordPriceHandler(FakeUnitOfWork(db)).handle(1, "abc")

        assert db.records[1].current_price == Money.of("10.00")


class TestShowStock:

    def test_lists_every_record_with_status(self):
        db = FakeDatabase([make_record(1, "A", stock=2), make_record(2, "B", stock=0)])

        lines = ShowStockHandler(FakeUnitOfWork(db)).handle()

        assert [(line.name, line.quantity, line.status) for line in lines] == [
            ("A", 2, "In stock"),
            ("B", 0, "Out of stock"),
        ]

    def test_in_stock_only(self):
        db = FakeDatabase([make_record(1, "A", stock=2), make_record(2, "B", stock=0)])

        lines = ShowStockHandler(FakeUnitOfWork(db)).handle(in_stock_only=True)

        assert [line.record_id for line in lines] == [1]


class TestShowAggregates:

    def _setup(self):
        db = FakeDatabase([make_record(1, "A", stock=5, price="10.00")])
        CreateShipmentHandler(FakeUnitOfWork(db)).handle(
            ShipmentHeaderSpec(1, date(2024, 1, 2), "inv/1"), [1], {1: 3}
        )
        CreateSaleHandler(FakeUnitOfWork(db)).handle(
            SaleHeaderSpec(date(2024, 1, 3), "rec/1"), [1], {1: 2}
        )
        return db

    def test_show_shipment(self):
        db = self._setup()

        dto = ShowShipmentHandler(FakeUnitOfWork(db)).handle(1)

        assert dto.date == "2024-01-02"
        assert dto.total_quantity == 3
        assert [i.record_name for i in dto.items] == ["A"]

    def test_show_sale_with_deleted_record(self):
        db = self._setup()
        del db.records[1]

        dto = ShowSaleHandler(FakeUnitOfWork(db)).handle(1)

        assert dto.items[0].record_name == "<deleted record #1>"
        assert dto.items[0].line_total == "20.00"
        assert dto.total == "20.00"

    def test_lists(self):
        db = self._setup()

        assert [s.id for s in ListShipmentsHandler(FakeUnitOfWork(db)).handle()] == [1]
        assert [s.id for s in ListSalesHandler(FakeUnitOfWork(db)).handle()] == [1]

    def test_show_missing(self):
        with pytest.raises(EntityNotFoundError):
            ShowShipmentHandler(FakeUnitOfWork()).handle(1)
        with pytest.raises(EntityNotFoundError):
            ShowSaleHandler(FakeUnitOfWork()).handle(1)
