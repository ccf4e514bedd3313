"""
Database adapter interfaces, registry, and implementations.
"""

from ..errors import ConfigurationError, DataAccessConnectionError, DataAccessError
from .base import (
    AdapterFactory,
    AdapterInterface,
    FetchMode,
    available_adapters,
    get_adapter_factory,
    register_adapter,
)
from .sqlalchemy_core import SQLAlchemyCoreAdapter

register_adapter("SQLAlchemyCore", SQLAlchemyCoreAdapter)

__all__ = [
    "AdapterFactory",
    "AdapterInterface",
    "FetchMode",
    "DataAccessError",
    "ConfigurationError",
    "DataAccessConnectionError",
    "SQLAlchemyCoreAdapter",
    "available_adapters",
    "get_adapter_factory",
    "register_adapter",
]
