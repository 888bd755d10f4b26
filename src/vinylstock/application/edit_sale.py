"""Application service: Edit Sale use case.

Like a shipment edit, only the net change per record reaches stock, with
the sign reversed: dropping a record from the sale puts its units back,
raising a quantity takes the difference out.

Sufficiency is checked against the net delta of each record for the
whole edit.  A raised quantity therefore needs only the extra units in
stock, and lowering or removing a line item never needs stock at all.
Any shortage rejects the whole edit before anything is touched.

Newly inserted line items snapshot the record's current price.  Line
items whose quantity changes keep the price they were sold at.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from vinylstock.application.create_sale import reject_missing_quantities
from vinylstock.application.dto import SaleHeaderSpec, SaleResultDTO
from vinylstock.application.mappers import (
    line_item_changes_to_dto,
    sale_to_dto,
    stock_changes_to_dto,
)
from vinylstock.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ValidationError,
)
from vinylstock.domain.model.sale import Sale
from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.domain.service.line_item_diff import SALE_SIGN, diff_line_items
from vinylstock.domain.service.record_references import find_missing, resolve_records
from vinylstock.domain.service.stock_adjuster import StockAdjuster
from vinylstock.domain.service.stock_sufficiency import StockSufficiencyService

logger = logging.getLogger(__name__)


class EditSaleHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        sale_id: int,
        header: SaleHeaderSpec,
        selection: Iterable[int],
        quantities: Mapping[int, int],
        expected_version: int | None = None,
    ) -> SaleResultDTO:
        selection = list(selection)
        with self._uow as uow:
            sale = uow.sales.get_by_id(sale_id)
            if sale is None:
                raise EntityNotFoundError(f"Sale #{sale_id} not found")
            if expected_version is not None and sale.version != expected_version:
                raise ConcurrencyConflictError(
                    f"Sale #{sale_id} was changed by someone else "
                    f"(version {sale.version}, expected {expected_version}); "
                    f"reload it and try again"
                )

            # Phase 1: validate
            header_before = _header_of(sale)
            sale.update_header(header.date, header.receipt_link)
            if not selection:
                raise ValidationError("A sale must contain at least one record")

            diff = diff_line_items(sale.quantities, selection, quantities)
            records = resolve_records(
                uow.records, [*diff.added, *diff.changed, *diff.rejected]
            )
            reject_missing_quantities(diff)

            if diff.is_empty and _header_of(sale) == header_before:
                logger.info("Sale #%s unchanged", sale_id)
                return SaleResultDTO(
                    sale=sale_to_dto(sale, uow.records),
                    stock_changes=[],
                    line_items=line_item_changes_to_dto(diff),
                )

            deltas = diff.deltas(SALE_SIGN)
            for record_id in find_missing(uow.records, diff.removed):
                logger.warning(
                    "Record #%s no longer exists; dropping its line item from "
                    "sale #%s without a stock reversal",
                    record_id, sale_id,
                )
                del deltas[record_id]
            StockSufficiencyService(uow.records).check(deltas)

            # Phase 2: mutate
            adjustments = StockAdjuster(uow.records).apply(deltas)

            for record_id in diff.removed:
                sale.remove_item(record_id)
            for record_id, quantity in diff.added.items():
                sale.add_item(record_id, quantity, records[record_id].current_price)
            for record_id, change in diff.changed.items():
                sale.change_quantity(record_id, change.new)

            uow.sales.save(sale)
            uow.commit()

            logger.info(
                "Sale #%s edited: +%d / ~%d / -%d line item(s), total %s",
                sale_id, len(diff.added), len(diff.changed), len(diff.removed),
                sale.total,
            )
            return SaleResultDTO(
                sale=sale_to_dto(sale, uow.records),
                stock_changes=stock_changes_to_dto(adjustments),
                line_items=line_item_changes_to_dto(diff),
            )


def _header_of(sale: Sale) -> tuple:
    return (sale.date, sale.receipt_link)
