"""Abstract unit of work.

Every shipment or sale operation runs inside one unit of work: header
writes, line-item writes and stock adjustments made through its
repositories either all land on ``commit()`` or none of them do.

Usage::

    with uow:
        record = uow.records.get_by_id(1)
        ...
        uow.commit()

Leaving the ``with`` block without committing rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vinylstock.domain.repository.record_repository import RecordRepository
from vinylstock.domain.repository.sale_repository import SaleRepository
from vinylstock.domain.repository.shipment_repository import ShipmentRepository


class UnitOfWork(ABC):

    records: RecordRepository
    shipments: ShipmentRepository
    sales: SaleRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change visible at once.

        Raises ConcurrencyConflictError if an aggregate saved or deleted
        here was changed by another writer after it was loaded, and
        EntityNotFoundError if it was deleted in the meantime.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after ``commit()``."""
