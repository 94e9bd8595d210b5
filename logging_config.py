"""Logging setup shared by the demo program and the service.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the console handler once on the root logger.
"""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "decimal-bigint-console"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a console handler to the root logger and set its level.

    Calling it again only updates the level.
    """
    if isinstance(level, str):
        level = level.upper()
    root = logging.getLogger()
    root.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    return root
