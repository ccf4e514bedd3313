"""
Error hierarchy for dataaccess.
"""

from __future__ import annotations

from typing import Any


class DataAccessError(RuntimeError):
    """Base error for data-access failures raised by this package."""


class ConfigurationError(DataAccessError):
    """Raised when configuration is missing, invalid, or names an unknown adapter."""


class DataAccessConnectionError(DataAccessError):
    """
    Raised when the initial database connection cannot be established.

    The message is sanitized before construction; ``code`` carries the
    driver's error code when one was available.
    """

    def __init__(self, message: str, *, code: Any = None) -> None:
        super().__init__(message)
        self.code = code
