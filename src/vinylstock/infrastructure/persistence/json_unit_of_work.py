"""JSON-file-backed implementation of UnitOfWork.

On entry the store's exclusive lock is taken and the whole document is
loaded; repositories work on that in-memory copy.  ``commit()`` replaces
the file atomically.  Leaving the block without committing simply drops
the copy.

The lock is held from load to commit, so no other writer can touch any
record, shipment or sale in between.  Edits made from a stale view are
caught by the handlers comparing the caller's expected version with the
one loaded here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vinylstock.domain.repository.unit_of_work import UnitOfWork
from vinylstock.infrastructure.persistence.json_record_repository import (
    JsonRecordRepository,
)
from vinylstock.infrastructure.persistence.json_sale_repository import JsonSaleRepository
from vinylstock.infrastructure.persistence.json_shipment_repository import (
    JsonShipmentRepository,
)
from vinylstock.infrastructure.persistence.json_store import SEQUENCES, Document, JsonStore

logger = logging.getLogger(__name__)


class JsonUnitOfWork(UnitOfWork):

    records: JsonRecordRepository
    shipments: JsonShipmentRepository
    sales: JsonSaleRepository

    def __init__(self, file_path: Path) -> None:
        self._store = JsonStore(file_path)
        self._document: Document | None = None
        self._lock = None

    def __enter__(self) -> JsonUnitOfWork:
        if self._lock is not None:
            raise RuntimeError("Unit of work is already in use")
        self._lock = self._store.locked()
        self._lock.__enter__()
        try:
            self._begin()
        except BaseException:
            self._release()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._release()

    def commit(self) -> None:
        if self._document is None:
            raise RuntimeError("Nothing to commit: unit of work is not active")
        self._store.write(self._document)
        self._document = None
        logger.debug("Committed unit of work on %s", self._store.file_path)

    def rollback(self) -> None:
        if self._document is not None:
            logger.debug("Rolled back unit of work on %s", self._store.file_path)
        self._document = None

    # --- Internal helpers -----------------------------------------------------

    def _begin(self) -> None:
        self._document = self._store.load()
        doc = self._document
        self.records = JsonRecordRepository(doc["records"])
        self.shipments = JsonShipmentRepository(
            doc["shipments"], doc["shipment_records"], doc[SEQUENCES]
        )
        self.sales = JsonSaleRepository(doc["sales"], doc["sale_records"], doc[SEQUENCES])

    def _release(self) -> None:
        lock, self._lock = self._lock, None
        if lock is not None:
            lock.__exit__(None, None, None)
