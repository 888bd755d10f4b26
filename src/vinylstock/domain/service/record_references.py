"""Resolve the record ids referenced by a shipment or sale selection."""

from __future__ import annotations

from collections.abc import Iterable

from vinylstock.domain.exceptions import ValidationError
from vinylstock.domain.model.record import Record
from vinylstock.domain.repository.record_repository import RecordRepository


def resolve_records(
    record_repo: RecordRepository, record_ids: Iterable[int]
) -> dict[int, Record]:
    """Load every referenced record, failing on the first unknown ids.

    All missing ids are reported together so the caller can fix the
    selection in one go.
    """
    found: dict[int, Record] = {}
    missing: list[int] = []
    for record_id in sorted(set(record_ids)):
        record = record_repo.get_by_id(record_id)
        if record is None:
            missing.append(record_id)
        else:
            found[record_id] = record
    if missing:
        ids = ", ".join(f"#{rid}" for rid in missing)
        raise ValidationError(f"Unknown record(s): {ids}", record_ids=tuple(missing))
    return found


def find_missing(record_repo: RecordRepository, record_ids: Iterable[int]) -> list[int]:
    """Return the ids (sorted) that no longer resolve to a record."""
    return [rid for rid in sorted(set(record_ids)) if record_repo.get_by_id(rid) is None]
