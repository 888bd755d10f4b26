"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``record_ids`` names the records responsible for the failure, if any.
    """

    def __init__(self, message: str, record_ids: tuple[int, ...] = ()) -> None:
        super().__init__(message)
        self.record_ids = tuple(record_ids)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConcurrencyConflictError(DomainException):
    """The aggregate was modified by another writer since it was loaded.

    Never retried internally: the caller reloads and resubmits.
    """


@dataclass(frozen=True)
class StockShortage:
    record_id: int
    record_name: str
    requested: int
    available: int

    def __str__(self) -> str:
        return (
            f"'{self.record_name}' (#{self.record_id}): "
            f"need {self.requested}, have {self.available} available"
        )


class InsufficientStockError(ValidationError):
    """A sale would drive one or more records' stock below zero."""

    def __init__(self, shortages: list[StockShortage]) -> None:
        self.shortages = tuple(shortages)
        super().__init__(
            "Insufficient stock for " + "; ".join(str(s) for s in self.shortages),
            record_ids=tuple(s.record_id for s in self.shortages),
        )

    @property
    def record_id(self) -> int:
        """The first offending record."""
        return self.shortages[0].record_id

    @property
    def available(self) -> int:
        return self.shortages[0].available
