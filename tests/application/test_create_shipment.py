"""Integration tests for the CreateShipment use case."""

from datetime import date

import pytest

from vinylstock.application.create_shipment import CreateShipmentHandler
from vinylstock.application.dto import ShipmentHeaderSpec
from vinylstock.domain.exceptions import ValidationError
from vinylstock.domain.model.status import StockStatus
from tests.fakes import FakeDatabase, FakeUnitOfWork, make_record, stock_of

HEADER = ShipmentHeaderSpec(supplier_id=1, date=date(2024, 5, 2), invoice_link="invoices/42.pdf")


def _setup():
    db = FakeDatabase([
        make_record(1, name="Kind of Blue", stock=0),
        make_record(2, name="Abbey Road", stock=3),
    ])
    return db, CreateShipmentHandler(FakeUnitOfWork(db))


class TestCreateShipmentHappyPath:

    def test_received_quantities_are_added_to_stock(self):
        db, handler = _setup()

        result = handler.handle(HEADER, [1, 2], {1: 10, 2: 4})

        assert stock_of(db, 1) == 10
        assert stock_of(db, 2) == 7
        assert db.records[1].status is StockStatus.IN_STOCK
        assert db.shipments[result.shipment.id].quantities == {1: 10, 2: 4}

    def test_result_describes_the_shipment(self):
        _, handler = _setup()

        result = handler.handle(HEADER, [1], {1: 2})

        assert result.shipment.id == 1
        assert result.shipment.version == 1
        assert result.shipment.date == "2024-05-02"
        assert [(i.record_name, i.quantity) for i in result.shipment.items] == [("Kind of Blue", 2)]
        assert [(c.record_id, c.delta, c.quantity) for c in result.stock_changes] == [(1, 2, 2)]
        assert result.line_items.inserted == (1,)


class TestCreateShipmentBestEffort:

    def test_non_positive_quantities_are_skipped_and_reported(self):
        db, handler = _setup()

        result = handler.handle(HEADER, [1, 2], {1: 5, 2: 0})

        assert result.skipped == {2: 0}
        assert db.shipments[result.shipment.id].quantities == {1: 5}
        assert stock_of(db, 2) == 3

    def test_selected_record_without_quantity_is_skipped(self):
        db, handler = _setup()

        result = handler.handle(HEADER, [1, 2], {1: 5})

        assert result.skipped == {2: None}
        assert stock_of(db, 2) == 3


class TestCreateShipmentValidation:

    def test_unknown_record_rejects_whole_shipment(self):
        db, handler = _setup()

        with pytest.raises(ValidationError, match="Unknown record") as exc_info:
            handler.handle(HEADER, [1, 99], {1: 5, 99: 1})

        assert exc_info.value.record_ids == (99,)
        assert stock_of(db, 1) == 0
        assert db.shipments == {}

    def test_missing_supplier_rejected_without_mutation(self):
        db, handler = _setup()
        header = ShipmentHeaderSpec(supplier_id=0, date=date(2024, 5, 2), invoice_link="x")

        with pytest.raises(ValidationError, match="Supplier is required"):
            handler.handle(header, [1], {1: 5})

        assert stock_of(db, 1) == 0
        assert db.shipments == {}
