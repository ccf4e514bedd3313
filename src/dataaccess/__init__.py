"""
dataaccess public package initialization.

Exposes the configuration, builder, facade, adapter registry, and error types.
"""

from .adapters import (  # noqa: F401
    AdapterInterface,
    FetchMode,
    SQLAlchemyCoreAdapter,
    available_adapters,
    register_adapter,
)
from .builder import Builder  # noqa: F401
from .config import Config  # noqa: F401
from .errors import ConfigurationError, DataAccessConnectionError, DataAccessError  # noqa: F401
from .facade import DataAccess  # noqa: F401
from .tables import strip_missing_columns  # noqa: F401

__all__ = [
    "AdapterInterface",
    "Builder",
    "Config",
    "ConfigurationError",
    "DataAccess",
    "DataAccessConnectionError",
    "DataAccessError",
    "FetchMode",
    "SQLAlchemyCoreAdapter",
    "available_adapters",
    "register_adapter",
    "strip_missing_columns",
]
