"""Availability status of a record, derived from its stock quantity."""

from __future__ import annotations

from enum import Enum


class StockStatus(Enum):
    # Values match the rows of the ``statuses`` lookup table.
    IN_STOCK = 1
    OUT_OF_STOCK = 2

    @property
    def label(self) -> str:
        return "In stock" if self is StockStatus.IN_STOCK else "Out of stock"


def derive_status(quantity: int) -> StockStatus:
    """Map a stock quantity to its availability status."""
    if quantity > 0:
        return StockStatus.IN_STOCK
    return StockStatus.OUT_OF_STOCK
