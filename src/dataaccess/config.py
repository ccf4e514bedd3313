"""
Configuration holder consumed by the builder and adapters.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from .errors import ConfigurationError
from .security.dsns import redact_dsn
from .utils.logging import null_logger

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

DEFAULT_ADAPTER = "SQLAlchemyCore"
ENV_PREFIX = "DATAACCESS_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


class Config:
    """
    Settings for one logical database connection.

    Setters return ``self`` so a configuration can be written as a chain.
    Values are not validated when set; a bad DSN surfaces when the adapter
    connects.
    """

    def __init__(self) -> None:
        self._adapter = DEFAULT_ADAPTER
        self._dsn: Optional[str] = None
        self._db_user: Optional[str] = None
        self._db_pass: Optional[str] = None
        self._strip_missing_columns = False
        self._tables_definition: dict[str, Iterable[str]] = {}
        self._logger: Optional[logging.Logger] = None
        self._connection: Optional["Connection"] = None
        self._slow_query_ms: Optional[int] = None
        self._engine_options: dict[str, Any] = {}

    # ------------------------------------------------------------------ #
    def get_adapter(self) -> str:
        return self._adapter

    def set_adapter(self, adapter: str) -> "Config":
        self._adapter = adapter
        return self

    def get_dsn(self) -> str:
        if self._dsn is None:
            raise ConfigurationError("No DSN configured; call set_dsn() first.")
        return self._dsn

    def set_dsn(self, dsn: str) -> "Config":
        self._dsn = dsn
        return self

    def get_db_user(self) -> Optional[str]:
        return self._db_user

    def set_db_user(self, db_user: Optional[str] = None) -> "Config":
        self._db_user = db_user
        return self

    def get_db_pass(self) -> Optional[str]:
        return self._db_pass

    def set_db_pass(self, db_pass: Optional[str] = None) -> "Config":
        self._db_pass = db_pass
        return self

    def get_strip_missing_columns(self) -> bool:
        return self._strip_missing_columns

    def set_strip_missing_columns(self, strip_missing_columns: bool) -> "Config":
        self._strip_missing_columns = strip_missing_columns
        return self

    def get_tables_definition(self) -> dict[str, Iterable[str]]:
        return self._tables_definition

    def set_tables_definition(self, tables_definition: Mapping[str, Iterable[str]]) -> "Config":
        self._tables_definition = dict(tables_definition)
        return self

    def get_logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = null_logger()
        return self._logger

    def set_logger(self, logger: logging.Logger) -> "Config":
        self._logger = logger
        return self

    def get_connection(self) -> Optional["Connection"]:
        return self._connection

    def set_connection(self, connection: "Connection") -> "Config":
        """
        Supply an already-open SQLAlchemy connection for the adapter to reuse.
        """

        self._connection = connection
        return self

    def get_slow_query_ms(self) -> Optional[int]:
        return self._slow_query_ms

    def set_slow_query_ms(self, slow_query_ms: Optional[int]) -> "Config":
        self._slow_query_ms = slow_query_ms
        return self

    def get_engine_options(self) -> dict[str, Any]:
        return self._engine_options

    def set_engine_options(self, **options: Any) -> "Config":
        self._engine_options = dict(options)
        return self

    # ------------------------------------------------------------------ #
    def redacted_dsn(self) -> str:
        """
        Return the DSN safe for logging (credentials removed).
        """

        if self._dsn is None:
            return "<unset>"
        return redact_dsn(self._dsn)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None):
        """
        Build a configuration from ``<prefix>DSN`` and related variables.
        """

        env = os.environ if environ is None else environ
        dsn = env.get(f"{prefix}DSN")
        if not dsn:
            raise ConfigurationError(f"Environment variable {prefix}DSN is not set")

        config = cls().set_dsn(dsn)
        if env.get(f"{prefix}ADAPTER"):
            config.set_adapter(env[f"{prefix}ADAPTER"])
        if f"{prefix}USER" in env:
            config.set_db_user(env[f"{prefix}USER"])
        if f"{prefix}PASSWORD" in env:
            config.set_db_pass(env[f"{prefix}PASSWORD"])
        key = f"{prefix}STRIP_MISSING_COLUMNS"
        if key in env:
            config.set_strip_missing_columns(_parse_bool(env[key], key=key))
        key = f"{prefix}SLOW_QUERY_MS"
        if key in env:
            config.set_slow_query_ms(_parse_int(env[key], key=key))
        return config
