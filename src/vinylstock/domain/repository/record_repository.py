"""Abstract repository for the Record aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vinylstock.domain.model.record import Record


class RecordRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique record ID."""

    @abstractmethod
    def get_by_id(self, record_id: int) -> Record | None:
        """Return a record by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Record]:
        """Return every record, ordered by ID."""

    @abstractmethod
    def save(self, record: Record) -> None:
        """Persist a new or updated record (quantity and status together)."""
