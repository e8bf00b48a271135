"""Logging configuration for mb-haproxy."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_path: Path, *, verbose: bool = False) -> None:
    """Attach a rotating file handler to the package logger.

    With ``verbose``, stats socket traffic is also echoed to stderr.
    Idempotent: skips if handlers are already attached.
    """
    root = logging.getLogger("mb_haproxy")
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        root.addHandler(stderr_handler)

    root.setLevel(logging.DEBUG)
