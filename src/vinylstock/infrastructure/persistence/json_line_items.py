"""Line-item table: association rows keyed by ``(aggregate_id, record_id)``.

Both ``shipment_records`` and ``sale_records`` are stored this way.
A record appears at most once per aggregate.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class JsonLineItemTable:

    def __init__(self, rows: list[dict], owner_key: str) -> None:
        self._rows = rows
        self._owner_key = owner_key

    def read(self, aggregate_id: int) -> dict[int, dict]:
        """Bulk read: every row of one aggregate, keyed by record id."""
        return {
            row["record_id"]: row
            for row in self._rows
            if row[self._owner_key] == aggregate_id
        }

    def delete_all(self, aggregate_id: int) -> int:
        before = len(self._rows)
        self._rows[:] = [r for r in self._rows if r[self._owner_key] != aggregate_id]
        return before - len(self._rows)

    def sync(self, aggregate_id: int, wanted: dict[int, dict]) -> tuple[int, int, int]:
        """Make the stored rows of *aggregate_id* equal *wanted*.

        The table is indexed once; only rows that actually differ are
        written.  Returns the number of rows inserted, updated and deleted.
        """
        positions = self._positions(aggregate_id)

        updated = 0
        for record_id in sorted(wanted.keys() & positions.keys()):
            index = positions[record_id]
            if self._rows[index] != wanted[record_id]:
                self._rows[index] = wanted[record_id]
                updated += 1

        stale = {positions[rid] for rid in positions.keys() - wanted.keys()}
        if stale:
            self._rows[:] = [row for i, row in enumerate(self._rows) if i not in stale]

        new_ids = sorted(wanted.keys() - positions.keys())
        self._rows.extend(wanted[rid] for rid in new_ids)

        inserted, deleted = len(new_ids), len(stale)
        if inserted or updated or deleted:
            logger.debug(
                "%s #%s line items: +%d ~%d -%d",
                self._owner_key, aggregate_id, inserted, updated, deleted,
            )
        return inserted, updated, deleted

    def _positions(self, aggregate_id: int) -> dict[int, int]:
        """``record_id -> row index`` for every row of one aggregate."""
        positions: dict[int, int] = {}
        for i, row in enumerate(self._rows):
            if row[self._owner_key] != aggregate_id:
                continue
            if row["record_id"] in positions:
                raise KeyError(f"Duplicate line item {(aggregate_id, row['record_id'])}")
            positions[row["record_id"]] = i
        return positions
