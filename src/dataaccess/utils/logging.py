"""Structured logging helpers for dataaccess."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

TRACE_MESSAGE = "SQL executed"


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger("dataaccess")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"dataaccess.{name}")


def null_logger() -> logging.Logger:
    """
    Return a logger that discards every record.
    """

    logger = logging.getLogger("dataaccess.null")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


def time_call(logger: Any, *, threshold_ms: Optional[float] = None):
    """
    Time a block and emit one call trace when it completes without error.

    The caller fills in ``timer.sql`` and ``timer.params`` inside the block.
    Records are emitted at DEBUG, or at WARNING once ``threshold_ms`` is reached.
    """

    start = time.monotonic()

    class Timer:
        sql: str | None = None
        params: Any = None
        elapsed_ms: float = 0.0

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            self.elapsed_ms = (time.monotonic() - start) * 1000
            if exc_type is not None:
                return
            extra = {"sql": self.sql, "params": self.params, "duration": self.elapsed_ms}
            if threshold_ms is not None and self.elapsed_ms >= threshold_ms:
                logger.warning(TRACE_MESSAGE, extra=extra)
            else:
                logger.debug(TRACE_MESSAGE, extra=extra)

    return Timer()
