"""Application service: Delete Sale use case.

Every sold quantity goes back into stock before the sale and its line
items are removed.  Deleting a sale that does not exist is a no-op.
"""

from __future__ import annotations

import logging

from vinylstock.application.dto import DeletionDTO
from vinylstock.application.mappers import stock_changes_to_dto
from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.domain.service.line_item_diff import SALE_SIGN, diff_line_items
from vinylstock.domain.service.record_references import find_missing
from vinylstock.domain.service.stock_adjuster import StockAdjuster

logger = logging.getLogger(__name__)


class DeleteSaleHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sale_id: int) -> DeletionDTO:
        with self._uow as uow:
            sale = uow.sales.get_by_id(sale_id)
            if sale is None:
                logger.info("Sale #%s does not exist; nothing to delete", sale_id)
                return DeletionDTO(found=False)

            deltas = diff_line_items(sale.quantities, (), {}).deltas(SALE_SIGN)
            for record_id in find_missing(uow.records, deltas):
                logger.warning(
                    "Record #%s no longer exists; skipping its stock reversal",
                    record_id,
                )
                del deltas[record_id]

            adjustments = StockAdjuster(uow.records).apply(deltas)
            uow.sales.delete(sale_id)
            uow.commit()

            logger.info("Sale #%s deleted: %d line item(s) returned to stock",
                        sale_id, len(sale.items))
            return DeletionDTO(found=True, stock_changes=stock_changes_to_dto(adjustments))
