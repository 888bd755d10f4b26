"""Domain service: Stock Sufficiency.

Sales must never oversell.  Before a sale's stock deltas are applied,
every negative delta is checked against the record's current stock, and
all shortages are reported together.  Nothing is mutated here: the check
runs entirely before the StockAdjuster touches any record, so a rejected
sale leaves stock exactly as it was.
"""

from __future__ import annotations

from collections.abc import Mapping

from vinylstock.domain.exceptions import (
    InsufficientStockError,
    StockShortage,
    ValidationError,
)
from vinylstock.domain.repository.record_repository import RecordRepository


class StockSufficiencyService:

    def __init__(self, record_repo: RecordRepository) -> None:
        self._record_repo = record_repo

    def check(self, deltas: Mapping[int, int]) -> None:
        """Verify that no delta drives a record's stock below zero.

        *deltas* holds the net change per record for the whole batch, so a
        line item whose quantity is lowered (or that is removed) never
        needs stock, and one that is raised needs only the difference.

        Raises InsufficientStockError listing every short record.
        """
        shortages: list[StockShortage] = []

        for record_id, delta in sorted(deltas.items()):
            if delta >= 0:
                continue
            record = self._record_repo.get_by_id(record_id)
            if record is None:
                raise ValidationError(
                    f"Unknown record(s): #{record_id}", record_ids=(record_id,)
                )
            if -delta > record.stock_quantity:
                shortages.append(
                    StockShortage(
                        record_id=record_id,
                        record_name=record.name,
                        requested=-delta,
                        available=record.stock_quantity,
                    )
                )

        if shortages:
            raise InsufficientStockError(shortages)
