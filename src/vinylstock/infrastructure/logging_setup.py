"""Logging configuration for the command-line interface."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

LOG_FILE = "vinylstock.log"
_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(data_dir: Path, verbose: bool = False) -> Path:
    """Configure rotating file logging under ``<data_dir>/logs/vinylstock.log``.

    With *verbose*, DEBUG and above are also echoed to stderr.
    """
    log_dir = data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE

    logger = logging.getLogger("vinylstock")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # avoid duplicate handlers when invoked repeatedly in one process
    for handler in list(logger.handlers):
        if getattr(handler, "_vinylstock", False):
            logger.removeHandler(handler)
            handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(_FORMAT))
    file_handler.setLevel(logging.INFO)
    file_handler._vinylstock = True  # type: ignore[attr-defined]
    logger.addHandler(file_handler)

    if verbose:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        console.setLevel(logging.DEBUG)
        console._vinylstock = True  # type: ignore[attr-defined]
        logger.addHandler(console)

    return log_path
