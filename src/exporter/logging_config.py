# src/exporter/logging_config.py
"""
Logging setup for the catalog exporter.

The CLI calls configure_logging() once before bootstrapping the host:

    from exporter.logging_config import configure_logging
    configure_logging(logging.DEBUG)

Each export pass then reports its entry count ("exported 812 blocks") and
host/content-pack problems surface as WARNING/ERROR lines.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """
    Attach one stdout handler to the root logger.

    If handlers already exist (an embedding application, or pytest), only
    the level is updated.

    Args:
        level: root logging level (e.g., logging.INFO, logging.DEBUG)
        stream: where to write; defaults to sys.stdout
    """
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
