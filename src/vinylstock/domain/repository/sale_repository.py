"""Abstract repository for the Sale aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vinylstock.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique sale ID."""

    @abstractmethod
    def get_by_id(self, sale_id: int) -> Sale | None:
        """Return a sale with its line items, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        """Return every sale, ordered by ID."""

    @abstractmethod
    def save(self, sale: Sale) -> None:
        """Persist a new or updated sale and its line items."""

    @abstractmethod
    def delete(self, sale_id: int) -> None:
        """Remove a sale and all of its line items."""
