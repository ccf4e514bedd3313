"""
Adapter protocol definitions and the adapter registry.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Protocol, Sequence

from ..errors import ConfigurationError

if TYPE_CHECKING:
    from ..config import Config


class FetchMode(enum.Enum):
    """
    Row shape returned by raw ``query()`` calls.
    """

    MAPPING = "mapping"
    TUPLE = "tuple"
    ROW = "row"


class AdapterInterface(Protocol):
    """
    Capability set every adapter exposes to the :class:`DataAccess` facade.
    """

    def create(self, table: str, data: Mapping[str, Any]) -> int:
        """
        Insert a row and return its generated identifier.
        """

    def find_column(self, table: str, where: Mapping[str, Any], column: str) -> Any:
        """
        Return ``column`` from the first row matching ``where``, or ``None``.
        """

    def find_one(self, table: str, where: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        """
        Return the first row matching ``where`` as a dict, or ``None``.
        """

    def find_all(
        self,
        table: str,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """
        Return every row matching ``where``; a pending ``group_by`` applies once.
        """

    def update(
        self, table: str, data: Mapping[str, Any], where: Optional[Mapping[str, Any]] = None
    ) -> None:
        """
        Update rows matching ``where``. An empty predicate matches every row.
        """

    def delete(self, table: str, where: Optional[Mapping[str, Any]] = None) -> None:
        """
        Delete rows matching ``where``. An empty predicate matches every row.
        """

    def begin_transaction(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def query(
        self,
        statement: Any,
        params: Mapping[str, Any] | Sequence[Any] | None = None,
        fetch_mode: Optional[FetchMode] = None,
    ) -> list[Any]:
        """
        Execute a raw read statement and return its rows.
        """

    def exec(self, statement: Any, params: Mapping[str, Any] | Sequence[Any] | None = None) -> int:
        """
        Execute a raw write statement and return the affected row count.
        """

    def get_last_insert_id(self) -> int: ...

    def group_by(self, column: str) -> None:
        """
        Group the next ``find_all`` call by ``column``.
        """

    def set_strip_missing_columns(self, flag: bool) -> None: ...


AdapterFactory = Callable[["Config"], AdapterInterface]

_registry: dict[str, AdapterFactory] = {}


def register_adapter(name: str, factory: AdapterFactory, *, replace: bool = False) -> None:
    if name in _registry and not replace:
        raise ConfigurationError(f"Adapter '{name}' is already registered.")
    _registry[name] = factory


def get_adapter_factory(name: str) -> AdapterFactory:
    try:
        return _registry[name]
    except KeyError as exc:
        available = ", ".join(available_adapters()) or "none"
        raise ConfigurationError(
            f"Unknown adapter '{name}'. Available adapters: {available}"
        ) from exc


def available_adapters() -> list[str]:
    return sorted(_registry)
