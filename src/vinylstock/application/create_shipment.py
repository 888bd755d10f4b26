"""Application service: Create Shipment use case.

Receiving is best-effort per line: a selected record without a positive
quantity is skipped and reported back, the rest of the shipment is
recorded.  An unknown record id still rejects the whole shipment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from vinylstock.application.dto import ShipmentHeaderSpec, ShipmentResultDTO
from vinylstock.application.mappers import (
    line_item_changes_to_dto,
    shipment_to_dto,
    stock_changes_to_dto,
)
from vinylstock.domain.model.shipment import Shipment
from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.domain.service.line_item_diff import SHIPMENT_SIGN, diff_line_items
from vinylstock.domain.service.record_references import resolve_records
from vinylstock.domain.service.stock_adjuster import StockAdjuster

logger = logging.getLogger(__name__)


class CreateShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        header: ShipmentHeaderSpec,
        selection: Iterable[int],
        quantities: Mapping[int, int],
    ) -> ShipmentResultDTO:
        """Record a new shipment and add its quantities to stock.

        Steps:
        1. Validate the header.
        2. Diff the selection against an empty shipment.
        3. Insert a line item for every record with a positive quantity.
        4. Add each received quantity to the record's stock.
        5. Commit header, line items and stock as one unit.
        """
        with self._uow as uow:
            shipment = Shipment.create(
                supplier_id=header.supplier_id,
                date=header.date,
                invoice_link=header.invoice_link,
            )

            diff = diff_line_items({}, selection, quantities)
            resolve_records(uow.records, [*diff.added, *diff.rejected])

            for record_id, requested in diff.rejected.items():
                logger.warning(
                    "Skipping record #%s in new shipment: quantity %r is not positive",
                    record_id, requested,
                )

            for record_id, quantity in diff.added.items():
                shipment.add_item(record_id, quantity)

            adjustments = StockAdjuster(uow.records).apply(diff.deltas(SHIPMENT_SIGN))
            uow.shipments.save(shipment)
            uow.commit()

            logger.info(
                "Shipment #%s created: %d line item(s), %d unit(s) received",
                shipment.id, len(shipment.items), shipment.total_quantity,
            )
            return ShipmentResultDTO(
                shipment=shipment_to_dto(shipment, uow.records),
                stock_changes=stock_changes_to_dto(adjustments),
                line_items=line_item_changes_to_dto(diff),
                skipped=dict(diff.rejected),
            )
