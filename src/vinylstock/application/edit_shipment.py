"""Application service: Edit Shipment use case.

Editing never re-applies a shipment from scratch.  The stored line items
are diffed against the new selection and only the net change per record
reaches stock:

- a record dropped from the selection has its received quantity taken
  back out of stock and its line item deleted;
- a newly selected record is received in full;
- a record whose quantity changed moves stock by the difference.

As on create, a newly selected record without a positive quantity is
skipped and reported.
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
from vinylstock.domain.exceptions import ConcurrencyConflictError, EntityNotFoundError
from vinylstock.domain.model.shipment import Shipment
from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.domain.service.line_item_diff import SHIPMENT_SIGN, diff_line_items
from vinylstock.domain.service.record_references import find_missing, resolve_records
from vinylstock.domain.service.stock_adjuster import StockAdjuster

logger = logging.getLogger(__name__)


class EditShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        shipment_id: int,
        header: ShipmentHeaderSpec,
        selection: Iterable[int],
        quantities: Mapping[int, int],
        expected_version: int | None = None,
    ) -> ShipmentResultDTO:
        """Apply a new header and line-item selection to a shipment.

        Args:
            shipment_id: The shipment to edit.
            header: The new header fields.
            selection: Record ids the shipment should contain afterwards.
            quantities: Requested quantity per selected record.
            expected_version: The version the caller loaded.  If given and
                the shipment has moved on since, the edit is rejected with
                ConcurrencyConflictError.
        """
        with self._uow as uow:
            shipment = uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment #{shipment_id} not found")
            if expected_version is not None and shipment.version != expected_version:
                raise ConcurrencyConflictError(
                    f"Shipment #{shipment_id} was changed by someone else "
                    f"(version {shipment.version}, expected {expected_version}); "
                    f"reload it and try again"
                )

            header_before = _header_of(shipment)
            shipment.update_header(header.supplier_id, header.date, header.invoice_link)

            diff = diff_line_items(shipment.quantities, selection, quantities)
            resolve_records(uow.records, [*diff.added, *diff.changed, *diff.rejected])

            for record_id, requested in diff.rejected.items():
                logger.warning(
                    "Skipping record #%s in shipment #%s: quantity %r is not positive",
                    record_id, shipment_id, requested,
                )

            if diff.is_empty and _header_of(shipment) == header_before:
                logger.info("Shipment #%s unchanged", shipment_id)
                return ShipmentResultDTO(
                    shipment=shipment_to_dto(shipment, uow.records),
                    stock_changes=[],
                    line_items=line_item_changes_to_dto(diff),
                    skipped=dict(diff.rejected),
                )

            deltas = diff.deltas(SHIPMENT_SIGN)
            for record_id in find_missing(uow.records, diff.removed):
                logger.warning(
                    "Record #%s no longer exists; dropping its line item from "
                    "shipment #%s without a stock reversal",
                    record_id, shipment_id,
                )
                del deltas[record_id]
            adjustments = StockAdjuster(uow.records).apply(deltas)

            for record_id in diff.removed:
                shipment.remove_item(record_id)
            for record_id, quantity in diff.added.items():
                shipment.add_item(record_id, quantity)
            for record_id, change in diff.changed.items():
                shipment.change_quantity(record_id, change.new)

            uow.shipments.save(shipment)
            uow.commit()

            logger.info(
                "Shipment #%s edited: +%d / ~%d / -%d line item(s)",
                shipment_id, len(diff.added), len(diff.changed), len(diff.removed),
            )
            return ShipmentResultDTO(
                shipment=shipment_to_dto(shipment, uow.records),
                stock_changes=stock_changes_to_dto(adjustments),
                line_items=line_item_changes_to_dto(diff),
                skipped=dict(diff.rejected),
            )


def _header_of(shipment: Shipment) -> tuple:
    return (shipment.supplier_id, shipment.date, shipment.invoice_link)
