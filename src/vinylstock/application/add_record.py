"""Application service: Add Record use case."""

from __future__ import annotations

import logging

from vinylstock.domain.model.record import Record
from vinylstock.domain.model.value_objects import Money
from vinylstock.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddRecordHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        artist_id: int,
        name: str,
        year: int,
        label: str,
        catalog_number: str,
        price: str,
        stock_quantity: int = 0,
    ) -> Record:
        """Register a record in the catalog with its opening stock.

        The status is derived from the opening stock, never given.
        """
        with self._uow as uow:
            record = Record.create(
                artist_id=artist_id,
                name=name,
                year=year,
                label=label,
                catalog_number=catalog_number,
                current_price=Money.of(price),
                stock_quantity=stock_quantity,
            )
            uow.records.save(record)
            uow.commit()

        logger.info("Record #%s '%s' added with %d in stock",
                    record.id, record.name, record.stock_quantity)
        return record
