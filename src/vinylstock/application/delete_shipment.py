"""Application service: Delete Shipment use case.

Deleting a shipment takes every received quantity back out of stock
(clamping at zero) and removes the line items together with the header.
Deleting a shipment that does not exist is a no-op.
"""

from __future__ import annotations

import logging

from vinylstock.application.dto import DeletionDTO
from vinylstock.application.mappers import stock_changes_to_dto
from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.domain.service.line_item_diff import SHIPMENT_SIGN, diff_line_items
from vinylstock.domain.service.record_references import find_missing
from vinylstock.domain.service.stock_adjuster import StockAdjuster

logger = logging.getLogger(__name__)


class DeleteShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: int) -> DeletionDTO:
        with self._uow as uow:
            shipment = uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                logger.info("Shipment #%s does not exist; nothing to delete", shipment_id)
                return DeletionDTO(found=False)

            # An empty selection removes every line item.
            diff = diff_line_items(shipment.quantities, (), {})
            deltas = diff.deltas(SHIPMENT_SIGN)
            for record_id in find_missing(uow.records, deltas):
                logger.warning(
                    "Record #%s no longer exists; skipping its stock reversal",
                    record_id,
                )
                del deltas[record_id]

            adjustments = StockAdjuster(uow.records).apply(deltas)
            uow.shipments.delete(shipment_id)
            uow.commit()

            logger.info(
                "Shipment #%s deleted: %d unit(s) reversed",
                shipment_id, shipment.total_quantity,
            )
            return DeletionDTO(found=True, stock_changes=stock_changes_to_dto(adjustments))
