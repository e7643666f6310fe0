"""Logging setup for the stt-proxy CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_logging(level: int = logging.WARNING, log_file: Path | None = None) -> logging.Handler:
    """Attach one handler to the ``stt`` logger: *log_file* if given, else stderr."""
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding='utf-8')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger('stt')
    root.setLevel(level)
    root.addHandler(handler)
    if log_file is not None:
        root.info('Logging started → %s', log_file)
    return handler
