"""Stock conservation across a sequence of shipment and sale operations."""

from datetime import date

from vinylstock.application.create_sale import CreateSaleHandler
from vinylstock.application.create_shipment import CreateShipmentHandler
from vinylstock.application.delete_sale import DeleteSaleHandler
from vinylstock.application.delete_shipment import DeleteShipmentHandler
from vinylstock.application.dto import SaleHeaderSpec, ShipmentHeaderSpec
from vinylstock.application.edit_sale import EditSaleHandler
from vinylstock.application.edit_shipment import EditShipmentHandler
from vinylstock.application.verify_stock_ledger import VerifyStockLedgerHandler
from vinylstock.domain.model.status import derive_status
from tests.fakes import FakeDatabase, FakeUnitOfWork, make_record, stock_of

SHIP = ShipmentHeaderSpec(supplier_id=1, date=date(2024, 2, 1), invoice_link="inv/1")
SELL = SaleHeaderSpec(date=date(2024, 2, 2), receipt_link="rec/1")


def _expected_stock(db, record_id):
    received = sum(s.quantities.get(record_id, 0) for s in db.shipments.values())
    sold = sum(s.quantities.get(record_id, 0) for s in db.sales.values())
    return db.records[record_id].opening_quantity + received - sold


def _assert_consistent(db):
    for record_id, record in db.records.items():
        assert record.stock_quantity == _expected_stock(db, record_id)
        assert record.status is derive_status(record.stock_quantity)


class TestLedger:

    def test_stock_follows_live_line_items_through_a_sequence(self):
        db = FakeDatabase([make_record(1, stock=1), make_record(2), make_record(3, stock=4)])

        ship = CreateShipmentHandler(FakeUnitOfWork(db)).handle(SHIP, [1, 2], {1: 6, 2: 2}).shipment.id
        _assert_consistent(db)
        sale = CreateSaleHandler(FakeUnitOfWork(db)).handle(SELL, [1, 3], {1: 5, 3: 4}).sale.id
        _assert_consistent(db)
        EditShipmentHandler(FakeUnitOfWork(db)).handle(ship, SHIP, [1, 2, 3], {1: 8, 2: 2, 3: 1})
        _assert_consistent(db)
        EditSaleHandler(FakeUnitOfWork(db)).handle(sale, SELL, [1, 2], {1: 7, 2: 2})
        _assert_consistent(db)
        DeleteSaleHandler(FakeUnitOfWork(db)).handle(sale)
        _assert_consistent(db)
        DeleteShipmentHandler(FakeUnitOfWork(db)).handle(ship)
        _assert_consistent(db)

        assert (stock_of(db, 1), stock_of(db, 2), stock_of(db, 3)) == (1, 0, 4)
        assert VerifyStockLedgerHandler(FakeUnitOfWork(db)).handle() == []

    def test_verify_reports_clamped_stock(self):
        db = FakeDatabase([make_record(1)])
        ship = CreateShipmentHandler(FakeUnitOfWork(db)).handle(SHIP, [1], {1: 5}).shipment.id
        CreateSaleHandler(FakeUnitOfWork(db)).handle(SELL, [1], {1: 4})
        DeleteShipmentHandler(FakeUnitOfWork(db)).handle(ship)

        [discrepancy] = VerifyStockLedgerHandler(FakeUnitOfWork(db)).handle()

        assert discrepancy.record_id == 1
        assert discrepancy.expected_quantity == -4
        assert discrepancy.actual_quantity == 0
        assert discrepancy.difference == 4
