"""Application service: Create Sale use case.

A sale is all-or-nothing.  Every selected record must exist, carry a
positive quantity and have enough stock; any violation rejects the whole
sale before a single record is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from vinylstock.application.dto import SaleHeaderSpec, SaleResultDTO
from vinylstock.application.mappers import (
    line_item_changes_to_dto,
    sale_to_dto,
    stock_changes_to_dto,
)
from vinylstock.domain.exceptions import ValidationError
from vinylstock.domain.model.sale import Sale
from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.domain.service.line_item_diff import (
    SALE_SIGN,
    LineItemDiff,
    diff_line_items,
)
from vinylstock.domain.service.record_references import resolve_records
from vinylstock.domain.service.stock_adjuster import StockAdjuster
from vinylstock.domain.service.stock_sufficiency import StockSufficiencyService

logger = logging.getLogger(__name__)


class CreateSaleHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        header: SaleHeaderSpec,
        selection: Iterable[int],
        quantities: Mapping[int, int],
    ) -> SaleResultDTO:
        """Record a new sale and take its quantities out of stock.

        Uses a two-phase approach:
          Phase 1 — validate: header, record references, quantities and
                    stock sufficiency.  Fails before any mutation.
          Phase 2 — mutate: insert line items with a snapshot of each
                    record's current price, adjust stock, commit.
        """
        selection = list(selection)
        with self._uow as uow:
            # Phase 1: validate
            sale = Sale.create(date=header.date, receipt_link=header.receipt_link)
            if not selection:
                raise ValidationError("A sale must contain at least one record")

            diff = diff_line_items({}, selection, quantities)
            records = resolve_records(uow.records, selection)
            reject_missing_quantities(diff)

            deltas = diff.deltas(SALE_SIGN)
            StockSufficiencyService(uow.records).check(deltas)

            # Phase 2: mutate
            for record_id, quantity in diff.added.items():
                sale.add_item(record_id, quantity, records[record_id].current_price)

            adjustments = StockAdjuster(uow.records).apply(deltas)
            uow.sales.save(sale)
            uow.commit()

            logger.info(
                "Sale #%s created: %d line item(s), total %s",
                sale.id, len(sale.items), sale.total,
            )
            return SaleResultDTO(
                sale=sale_to_dto(sale, uow.records),
                stock_changes=stock_changes_to_dto(adjustments),
                line_items=line_item_changes_to_dto(diff),
            )


def reject_missing_quantities(diff: LineItemDiff) -> None:
    """Raise if any newly selected record lacks a positive quantity."""
    if diff.rejected:
        ids = ", ".join(f"#{rid}" for rid in diff.rejected)
        raise ValidationError(
            f"Quantity must be greater than 0 for record(s): {ids}",
            record_ids=tuple(diff.rejected),
        )
