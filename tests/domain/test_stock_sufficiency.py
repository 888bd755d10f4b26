"""Unit tests for the StockSufficiencyService domain service."""

import pytest

from vinylstock.domain.exceptions import InsufficientStockError, ValidationError
from vinylstock.domain.service.stock_sufficiency import StockSufficiencyService
from tests.fakes import FakeRecordRepository, make_record


def _service() -> StockSufficiencyService:
    repo = FakeRecordRepository([
        make_record(1, name="Kind of Blue", stock=5),
        make_record(2, name="Abbey Road", stock=1),
    ])
    return StockSufficiencyService(repo)


class TestCheck:

    def test_enough_stock_passes(self):
        _service().check({1: -5, 2: -1})

    def test_positive_deltas_need_no_stock(self):
        _service().check({1: 100})

    def test_shortage_reports_record_and_available(self):
        with pytest.raises(InsufficientStockError, match="Abbey Road") as exc_info:
            _service().check({2: -2})

        err = exc_info.value
        assert err.record_id == 2
        assert err.available == 1
        assert err.shortages[0].requested == 2

    def test_all_shortages_reported_together(self):
        with pytest.raises(InsufficientStockError) as exc_info:
            _service().check({1: -6, 2: -3})

        assert exc_info.value.record_ids == (1, 2)

    def test_unknown_record_is_a_validation_error(self):
        with pytest.raises(ValidationError, match="Unknown record"):
            _service().check({42: -1})
