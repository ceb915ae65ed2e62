# app_logger.py
"""
Single source of truth for log configuration.
Every module imports `logger` from here instead of calling
`logging.getLogger` on its own.
"""

import logging
import os
from collections import deque
from typing import Deque

# ----------------------------------------------------------------------
# 1️⃣ Dedicated logger
# ----------------------------------------------------------------------
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_FILE = os.getenv("CHARGE_STATS_LOG_FILE", "charge_stats.log")

logger = logging.getLogger("ChargeStats")
logger.setLevel(logging.DEBUG)
logger.propagate = False               # keep charge stats out of the root logger

# ----------------------------------------------------------------------
# 2️⃣ In‑memory handler – the last N lines, readable by diagnostics/tests
# ----------------------------------------------------------------------
MAX_LOG_RECORDS = 200


class MemoryHandler(logging.Handler):
    """
    Keeps the newest *capacity* formatted records in a deque.
    Only INFO and above are kept; DEBUG goes to the file handler.
    """
    def __init__(self, capacity: int = MAX_LOG_RECORDS):
        super().__init__(level=logging.INFO)
        self.capacity = capacity
        self.buffer: Deque[str] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        self.buffer.append(self.format(record))


formatter = logging.Formatter(LOG_FORMAT)

memory_handler = MemoryHandler()
memory_handler.setFormatter(formatter)
logger.addHandler(memory_handler)

file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8", delay=True)
file_handler.setLevel(logging.DEBUG)
file_handler.setFormatter(formatter)
logger.addHandler(file_handler)

log_buffer = memory_handler.buffer


def log_debug(msg: str, *args, **kwargs) -> None:
    """Shortcut for `logger.debug(msg, *args, **kwargs)`."""
    logger.debug(msg, *args, **kwargs)
