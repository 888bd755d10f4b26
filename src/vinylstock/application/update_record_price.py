"""Application service: Update Record Price use case."""

from __future__ import annotations

import logging

from vinylstock.domain.exceptions import EntityNotFoundError
from vinylstock.domain.model.value_objects import Money
from vinylstock.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateRecordPriceHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, record_id: int, new_price: str) -> None:
        """Update a record's current price.

        This does NOT affect any existing sales — their line items
        captured a price snapshot when they were inserted.
        """
        with self._uow as uow:
            record = uow.records.get_by_id(record_id)
            if record is None:
                raise EntityNotFoundError(f"Record #{record_id} not found")

            record.update_price(Money.of(new_price))
            uow.records.save(record)
            uow.commit()

        logger.info("Record #%s price set to %s", record_id, record.current_price)
