"""Domain service: Line-Item Diff.

Compares the line items an aggregate already has with a newly submitted
selection and partitions the affected records into three groups with
plain set operations over the record ids:

  removed   old - selection    full reversal, line item deleted
  added     selection - old    full delta, line item inserted
  common    old & selection    net delta, line item quantity updated

A requested quantity of zero (or none at all) never removes an existing
line item: removal means leaving the record out of the selection.  For a
record that is being added, a missing or non-positive quantity is
rejected and reported back instead of being stored.

The diff is sign-agnostic.  Shipments turn it into stock deltas with
``SHIPMENT_SIGN`` (received units add stock), sales with ``SALE_SIGN``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

SHIPMENT_SIGN = 1
SALE_SIGN = -1


@dataclass(frozen=True)
class QuantityChange:
    old: int
    new: int

    @property
    def diff(self) -> int:
        return self.new - self.old


@dataclass(frozen=True)
class LineItemDiff:
    """Result of comparing stored line items with a new selection.

    Every mapping is keyed by record id.
    """

    removed: dict[int, int] = field(default_factory=dict)  # old quantity
    added: dict[int, int] = field(default_factory=dict)  # new quantity
    changed: dict[int, QuantityChange] = field(default_factory=dict)
    unchanged: frozenset[int] = frozenset()
    rejected: dict[int, int | None] = field(default_factory=dict)  # as requested

    @property
    def is_empty(self) -> bool:
        """True when applying the diff would mutate nothing."""
        return not (self.removed or self.added or self.changed)

    def deltas(self, sign: int) -> dict[int, int]:
        """Signed stock delta per affected record.

        ``sign`` is the direction a line item moves stock in:
        ``SHIPMENT_SIGN`` or ``SALE_SIGN``.
        """
        if sign not in (SHIPMENT_SIGN, SALE_SIGN):
            raise ValueError(f"sign must be +1 or -1, got {sign!r}")
        result: dict[int, int] = {}
        for record_id, old in self.removed.items():
            result[record_id] = -sign * old
        for record_id, new in self.added.items():
            result[record_id] = sign * new
        for record_id, change in self.changed.items():
            result[record_id] = sign * change.diff
        return dict(sorted(result.items()))


def diff_line_items(
    old_items: Mapping[int, int],
    selection: Iterable[int],
    quantities: Mapping[int, int],
) -> LineItemDiff:
    """Partition *selection* against *old_items*.

    Args:
        old_items: ``record_id -> quantity`` of the persisted line items
            (empty when the aggregate is being created).
        selection: record ids the caller wants the aggregate to contain.
        quantities: ``record_id -> requested quantity``.  Entries for
            records outside the selection are ignored.
    """
    selected = set(selection)
    old_ids = set(old_items)

    removed = {rid: old_items[rid] for rid in sorted(old_ids - selected)}

    added: dict[int, int] = {}
    rejected: dict[int, int | None] = {}
    for rid in sorted(selected - old_ids):
        requested = quantities.get(rid)
        if requested is not None and requested > 0:
            added[rid] = requested
        else:
            rejected[rid] = requested

    changed: dict[int, QuantityChange] = {}
    unchanged: set[int] = set()
    for rid in sorted(old_ids & selected):
        requested = quantities.get(rid)
        if requested is None or requested <= 0 or requested == old_items[rid]:
            unchanged.add(rid)
        else:
            changed[rid] = QuantityChange(old=old_items[rid], new=requested)

    return LineItemDiff(
        removed=removed,
        added=added,
        changed=changed,
        unchanged=frozenset(unchanged),
        rejected=rejected,
    )
