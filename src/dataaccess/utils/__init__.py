"""
Utility helpers shared across dataaccess packages.
"""

from .logging import configure_logging, get_logger, null_logger, time_call

__all__ = ["configure_logging", "get_logger", "null_logger", "time_call"]
