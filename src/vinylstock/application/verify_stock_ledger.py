"""Application service: Verify Stock Ledger use case (query).

Recomputes every record's stock from its opening quantity and the line
items that are currently live:

    expected = opening + sum(shipment quantities) - sum(sale quantities)

and reports each record whose stored quantity disagrees.
Stock that was clamped at zero (for instance a shipment deleted after
its units were sold) shows up here as a discrepancy as well.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass

from vinylstock.domain.model.status import derive_status
from vinylstock.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockDiscrepancyDTO:
    record_id: int
    name: str
    expected_quantity: int
    actual_quantity: int
    expected_status: str
    actual_status: str

    @property
    def difference(self) -> int:
        return self.actual_quantity - self.expected_quantity


class VerifyStockLedgerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[StockDiscrepancyDTO]:
        with self._uow as uow:
            received: dict[int, int] = defaultdict(int)
            for shipment in uow.shipments.list_all():
                for record_id, quantity in shipment.quantities.items():
                    received[record_id] += quantity

            sold: dict[int, int] = defaultdict(int)
            for sale in uow.sales.list_all():
                for record_id, quantity in sale.quantities.items():
                    sold[record_id] += quantity

            records = uow.records.list_all()

        discrepancies: list[StockDiscrepancyDTO] = []
        for record in records:
            expected = record.opening_quantity + received[record.id] - sold[record.id]
            expected_status = derive_status(expected)
            if expected == record.stock_quantity:
                continue
            discrepancies.append(
                StockDiscrepancyDTO(
                    record_id=record.id,  # type: ignore[arg-type]
                    name=record.name,
                    expected_quantity=expected,
                    actual_quantity=record.stock_quantity,
                    expected_status=expected_status.label,
                    actual_status=record.status.label,
                )
            )

        if discrepancies:
            logger.warning("Stock ledger check found %d discrepancy(ies)", len(discrepancies))
        else:
            logger.info("Stock ledger check passed for %d record(s)", len(records))
        return discrepancies
