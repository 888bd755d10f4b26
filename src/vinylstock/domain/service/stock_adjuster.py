"""Domain service: Stock Adjuster.

The only code path that moves a record's stock.  Each adjustment loads
the record, clamps the new quantity at zero, and saves quantity and the
re-derived status together through the record repository of the
current unit of work.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from vinylstock.domain.exceptions import EntityNotFoundError
from vinylstock.domain.model.status import StockStatus
from vinylstock.domain.repository.record_repository import RecordRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockAdjustment:
    record_id: int
    record_name: str
    delta: int
    previous_quantity: int
    quantity: int
    status: StockStatus

    @property
    def clamped(self) -> bool:
        """True if the delta would have taken the stock below zero."""
        return self.previous_quantity + self.delta < 0


class StockAdjuster:

    def __init__(self, record_repo: RecordRepository) -> None:
        self._record_repo = record_repo

    def adjust(self, record_id: int, delta: int) -> StockAdjustment:
        """Apply a signed *delta* to one record's stock.

        Raises EntityNotFoundError if the record does not exist.
        """
        record = self._record_repo.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(f"Record #{record_id} not found")

        previous = record.stock_quantity
        record.apply_delta(delta)
        self._record_repo.save(record)

        adjustment = StockAdjustment(
            record_id=record_id,
            record_name=record.name,
            delta=delta,
            previous_quantity=previous,
            quantity=record.stock_quantity,
            status=record.status,
        )
        if adjustment.clamped:
            logger.warning(
                "Stock of record #%s clamped at 0 (had %s, delta %s)",
                record_id, previous, delta,
            )
        logger.debug(
            "Record #%s stock %s -> %s (%s)",
            record_id, previous, record.stock_quantity, record.status.name,
        )
        return adjustment

    def apply(self, deltas: Mapping[int, int]) -> list[StockAdjustment]:
        """Apply a batch of deltas in record-id order, skipping zeros."""
        return [
            self.adjust(record_id, delta)
            for record_id, delta in sorted(deltas.items())
            if delta != 0
        ]
