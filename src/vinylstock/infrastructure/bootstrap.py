"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from vinylstock.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

DATA_DIR_ENV = "VINYLSTOCK_DATA_DIR"
STORE_FILE = "vinylstock.json"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir(override: str | Path | None = None) -> Path:
    """Data directory: explicit override, then $VINYLSTOCK_DATA_DIR, then ./data."""
    if override:
        return Path(override).expanduser()
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return _DEFAULT_DATA_DIR


def unit_of_work(directory: Path | None = None) -> JsonUnitOfWork:
    return JsonUnitOfWork((directory or data_dir()) / STORE_FILE)
