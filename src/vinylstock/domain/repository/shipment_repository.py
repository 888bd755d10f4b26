"""Abstract repository for the Shipment aggregate.

A shipment is loaded and saved together with its line items.  ``save``
synchronises the stored line items with the aggregate: rows are
inserted, updated or deleted by their ``(shipment_id, record_id)`` key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vinylstock.domain.model.shipment import Shipment


class ShipmentRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique shipment ID."""

    @abstractmethod
    def get_by_id(self, shipment_id: int) -> Shipment | None:
        """Return a shipment with its line items, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Shipment]:
        """Return every shipment, ordered by ID."""

    @abstractmethod
    def save(self, shipment: Shipment) -> None:
        """Persist a new or updated shipment and its line items."""

    @abstractmethod
    def delete(self, shipment_id: int) -> None:
        """Remove a shipment and all of its line items."""
