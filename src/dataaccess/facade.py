"""
Outward-facing facade forwarding every call to the configured adapter.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Mapping, Optional, Sequence

from .adapters.base import AdapterInterface, FetchMode


class DataAccess:
    """
    Exposes the adapter capability set without tying callers to a concrete adapter.
    """

    def __init__(self, adapter: AdapterInterface) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> AdapterInterface:
        return self._adapter

    # ------------------------------------------------------------------ #
    # Context management
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "DataAccess":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._adapter, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------ #
    def create(self, table: str, data: Mapping[str, Any]) -> int:
        return self._adapter.create(table, data)

    def find_column(self, table: str, where: Mapping[str, Any], column: str) -> Any:
        return self._adapter.find_column(table, where, column)

    def find_one(self, table: str, where: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        return self._adapter.find_one(table, where)

    def find_all(
        self,
        table: str,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **kwargs: Any,
    ) -> list[dict[str, Any]]:
        return self._adapter.find_all(table, where, order_by, limit, offset, **kwargs)

    def update(
        self, table: str, data: Mapping[str, Any], where: Optional[Mapping[str, Any]] = None
    ) -> None:
        self._adapter.update(table, data, where)

    def delete(self, table: str, where: Optional[Mapping[str, Any]] = None) -> None:
        self._adapter.delete(table, where)

    # ------------------------------------------------------------------ #
    def begin_transaction(self) -> None:
        self._adapter.begin_transaction()

    def commit(self) -> None:
        self._adapter.commit()

    def rollback(self) -> None:
        self._adapter.rollback()

    @contextmanager
    def transaction(self) -> Generator["DataAccess", None, None]:
        """
        Run a block in one flat transaction: commit on success, roll back on error.
        """

        self.begin_transaction()
        try:
            yield self
        except Exception:
            self.rollback()
            raise
        else:
            self.commit()

    # ------------------------------------------------------------------ #
    def query(
        self,
        statement: Any,
        params: Mapping[str, Any] | Sequence[Any] | None = None,
        fetch_mode: Optional[FetchMode] = None,
    ) -> list[Any]:
        return self._adapter.query(statement, params, fetch_mode)

    def exec(self, statement: Any, params: Mapping[str, Any] | Sequence[Any] | None = None) -> int:
        return self._adapter.exec(statement, params)

    def get_last_insert_id(self) -> int:
        return self._adapter.get_last_insert_id()

    def group_by(self, column: str) -> None:
        self._adapter.group_by(column)

    def set_strip_missing_columns(self, flag: bool) -> None:
        self._adapter.set_strip_missing_columns(flag)
