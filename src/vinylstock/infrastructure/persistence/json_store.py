"""Single-file JSON store shared by all repositories.

Every table lives in one JSON document so that a unit of work can replace
all of them in a single atomic ``os.replace``.  Writers serialise on an
exclusive advisory lock held on a sibling ``.lock`` file.

Besides the tables the document keeps ``next_ids``: the next id to hand
out per aggregate table.  Ids of deleted shipments and sales are never
handed out again.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TABLES = ("records", "shipments", "shipment_records", "sales", "sale_records")
SEQUENCES = "next_ids"

Document = dict[str, Any]


class JsonStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(file_path.name + ".lock")
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- Locking --------------------------------------------------------------

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store's exclusive lock for the duration of the block."""
        fd = os.open(self._lock_path, os.O_CREAT | os.O_RDWR, 0o666)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            yield
        finally:
            try:
                fcntl.flock(fd, fcntl.LOCK_UN)
            finally:
                os.close(fd)

    # --- Reading / writing ----------------------------------------------------

    def load(self) -> Document:
        with self._file_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        document: Document = {table: list(raw.get(table, [])) for table in TABLES}
        document[SEQUENCES] = dict(raw.get(SEQUENCES, {}))
        return document

    def write(self, document: Document) -> None:
        """Replace the whole document atomically."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._file_path.name}.", suffix=".tmp", dir=str(self._file_path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(document, tmp, indent=2)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._file_path)
        finally:
            Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Wrote %s", self._file_path)

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self.locked():
            if not self._file_path.exists():
                empty: Document = {table: [] for table in TABLES}
                empty[SEQUENCES] = {}
                self.write(empty)
                logger.info("Created empty store at %s", self._file_path)
