"""
Adapter building statements with SQLAlchemy Core and running them on one connection.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Callable, Optional

import sqlalchemy as sa
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.sql.expression import TableClause, TextClause

from ..errors import DataAccessConnectionError, DataAccessError
from ..security.dsns import build_url, dsn_password
from ..security.redaction import sanitize_error_message
from ..tables import strip_missing_columns
from ..utils import get_logger, time_call
from .base import AdapterInterface, FetchMode

if TYPE_CHECKING:
    from ..config import Config


_LAST_INSERT_ID_SQL = {
    "sqlite": "SELECT last_insert_rowid()",
    "mysql": "SELECT LAST_INSERT_ID()",
    "mariadb": "SELECT LAST_INSERT_ID()",
    "postgresql": "SELECT lastval()",
}


def _error_code(exc: BaseException) -> Any:
    orig = getattr(exc, "orig", None)
    if orig is not None:
        for attr in ("sqlstate", "pgcode", "sqlite_errorcode"):
            value = getattr(orig, attr, None)
            if value is not None:
                return value
        if orig.args and isinstance(orig.args[0], int):
            return orig.args[0]
    return getattr(exc, "code", None)


def _fetch(result: CursorResult, mode: FetchMode) -> list[Any]:
    if not result.returns_rows:
        return []
    if mode is FetchMode.MAPPING:
        return [dict(row) for row in result.mappings()]
    if mode is FetchMode.TUPLE:
        return [tuple(row) for row in result]
    return list(result)


def _rowcount(result: CursorResult) -> int:
    rowcount = result.rowcount
    return 0 if rowcount is None else int(rowcount)


class SQLAlchemyCoreAdapter(AdapterInterface):
    """
    Forwards CRUD calls to SQLAlchemy Core statements.

    The connection is opened eagerly. Statements run outside an explicit
    transaction are committed as soon as they complete. Every operation
    emits one call trace (sql, params, duration in ms) to the configured
    logger.
    """

    def __init__(self, cfg: "Config") -> None:
        self.cfg = cfg
        self.logger = get_logger("adapters.sqlalchemy")
        self._group_by_column: Optional[str] = None
        self._engine: Optional[Engine] = None

        supplied = cfg.get_connection()
        if supplied is not None:
            self._connection: Optional[Connection] = supplied
            self._owns_connection = False
        else:
            self._connection = self._connect()
            self._owns_connection = True

    # ------------------------------------------------------------------ #
    # Connection management
    # ------------------------------------------------------------------ #
    def _connect(self) -> Connection:
        self.logger.info("Connecting to %s", self.cfg.redacted_dsn())
        # No local in this frame may hold a credential: the error raised
        # here keeps the frame alive through its traceback.
        connection, failure = self._open_connection()
        if failure is not None:
            message, code = failure
            raise DataAccessConnectionError(message, code=code)
        return connection

    def _open_connection(self) -> tuple[Optional[Connection], Optional[tuple[str, Any]]]:
        """
        Open the engine and connection, or return a sanitized ``(message, code)``.
        """

        dsn = self.cfg.get_dsn()
        password = self.cfg.get_db_pass()
        try:
            url = build_url(dsn, self.cfg.get_db_user(), password)
            engine = sa.create_engine(url, **self.cfg.get_engine_options())
            connection = engine.connect()
        except Exception as exc:
            message = sanitize_error_message(str(exc), password, dsn_password(dsn))
            return None, (message, _error_code(exc))
        self._engine = engine
        return connection, None

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            raise DataAccessConnectionError("SQLAlchemyCoreAdapter is not connected.")
        return self._connection

    @property
    def dialect_name(self) -> str:
        return self.connection.dialect.name

    def close(self) -> None:
        if self._connection is None:
            return
        if self._owns_connection:
            try:
                self._connection.close()
            finally:
                if self._engine is not None:
                    self._engine.dispose()
                    self._engine = None
            self.logger.info("Closed connection to %s", self.cfg.redacted_dsn())
        self._connection = None

    # ------------------------------------------------------------------ #
    # CRUD
    # ------------------------------------------------------------------ #
    def create(self, table: str, data: Mapping[str, Any]) -> int:
        self._last_insert_id_sql()
        with self._timer() as timer:
            data = self._prepare_write(table, data)
            stmt = sa.insert(self._table(table, data))
            if data:
                stmt = stmt.values(data)
            self._trace(timer, stmt)
            self._run(stmt)
        return self.get_last_insert_id()

    def find_column(self, table: str, where: Mapping[str, Any], column: str) -> Any:
        with self._timer() as timer:
            stmt = self._select(table, where)
            self._trace(timer, stmt)
            row = self._run(stmt, lambda result: result.mappings().first())
            value = row.get(column) if row is not None else None
        return value

    def find_one(self, table: str, where: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        with self._timer() as timer:
            stmt = self._select(table, where)
            self._trace(timer, stmt)
            row = self._run(stmt, lambda result: result.mappings().first())
        return dict(row) if row is not None else None

    def find_all(
        self,
        table: str,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        *,
        group_by: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        # The pending modifier is consumed even when this call fails.
        pending, self._group_by_column = self._group_by_column, None
        group_by = group_by or pending

        with self._timer() as timer:
            stmt = self._select(table, where)
            if group_by:
                stmt = stmt.group_by(sa.column(group_by))
            if order_by:
                stmt = stmt.order_by(sa.literal_column(order_by))
            if limit:
                stmt = stmt.limit(limit)
            if offset:
                stmt = stmt.offset(offset)
            self._trace(timer, stmt)
            rows = self._run(stmt, lambda result: _fetch(result, FetchMode.MAPPING))
        return rows

    def update(
        self, table: str, data: Mapping[str, Any], where: Optional[Mapping[str, Any]] = None
    ) -> None:
        with self._timer() as timer:
            data = self._prepare_write(table, data)
            where = where or {}
            tbl = self._table(table, data, where)
            stmt = sa.update(tbl).values(data)
            clauses = self._equals(tbl, where)
            if clauses:
                stmt = stmt.where(*clauses)
            self._trace(timer, stmt)
            self._run(stmt)

    def delete(self, table: str, where: Optional[Mapping[str, Any]] = None) -> None:
        with self._timer() as timer:
            where = where or {}
            tbl = self._table(table, where)
            stmt = sa.delete(tbl)
            clauses = self._equals(tbl, where)
            if clauses:
                stmt = stmt.where(*clauses)
            self._trace(timer, stmt)
            self._run(stmt)

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def begin_transaction(self) -> None:
        self.connection.begin()

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    # ------------------------------------------------------------------ #
    # Raw statements
    # ------------------------------------------------------------------ #
    def query(
        self,
        statement: Any,
        params: Mapping[str, Any] | Sequence[Any] | None = None,
        fetch_mode: Optional[FetchMode] = None,
    ) -> list[Any]:
        mode = fetch_mode or FetchMode.MAPPING
        with self._timer() as timer:
            timer.sql, timer.params = str(statement), params
            rows = self._run_raw(statement, params, lambda result: _fetch(result, mode))
        return rows

    def exec(self, statement: Any, params: Mapping[str, Any] | Sequence[Any] | None = None) -> int:
        with self._timer() as timer:
            timer.sql, timer.params = str(statement), params
            count = self._run_raw(statement, params, _rowcount)
        return count

    def get_last_insert_id(self) -> int:
        value = self._run(sa.text(self._last_insert_id_sql()), lambda result: result.scalar())
        return int(value or 0)

    def _last_insert_id_sql(self) -> str:
        sql = _LAST_INSERT_ID_SQL.get(self.dialect_name)
        if sql is None:
            raise DataAccessError(
                f"Last insert id is not supported for dialect '{self.dialect_name}'."
            )
        return sql

    # ------------------------------------------------------------------ #
    # Modifiers
    # ------------------------------------------------------------------ #
    def group_by(self, column: str) -> None:
        self._group_by_column = column

    def set_strip_missing_columns(self, flag: bool) -> None:
        """
        Override the configured strip flag; the latest call wins.
        """

        self.cfg.set_strip_missing_columns(flag)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _timer(self):
        return time_call(self.cfg.get_logger(), threshold_ms=self.cfg.get_slow_query_ms())

    def _trace(self, timer: Any, statement: Any) -> None:
        compiled = statement.compile(dialect=self.connection.dialect)
        timer.sql, timer.params = str(compiled), dict(compiled.params)

    def _prepare_write(self, table: str, data: Mapping[str, Any]) -> dict[str, Any]:
        if self.cfg.get_strip_missing_columns():
            return strip_missing_columns(self.cfg.get_tables_definition(), table, data)
        return dict(data)

    @staticmethod
    def _table(name: str, *column_sets: Mapping[str, Any]) -> TableClause:
        names = dict.fromkeys(key for columns in column_sets for key in columns)
        schema = None
        if "." in name:
            schema, name = name.rsplit(".", 1)
        return sa.table(name, *(sa.column(key) for key in names), schema=schema)

    @staticmethod
    def _equals(tbl: TableClause, where: Mapping[str, Any]) -> list[Any]:
        clauses = []
        for key, value in where.items():
            col = tbl.c[key]
            if value is None:
                clauses.append(col.is_(None))
            elif isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(col.in_(list(value)))
            else:
                clauses.append(col == value)
        return clauses

    def _select(self, table: str, where: Optional[Mapping[str, Any]]):
        where = where or {}
        tbl = self._table(table, where)
        stmt = sa.select(sa.literal_column("*")).select_from(tbl)
        clauses = self._equals(tbl, where)
        if clauses:
            stmt = stmt.where(*clauses)
        return stmt

    def _run_raw(
        self,
        statement: Any,
        params: Mapping[str, Any] | Sequence[Any] | None,
        consume: Callable[[CursorResult], Any],
    ) -> Any:
        if params is not None and not isinstance(params, Mapping):
            if isinstance(statement, TextClause):
                statement = statement.text
            elif not isinstance(statement, str):
                raise DataAccessError(
                    "Positional parameters require a SQL string or text() statement."
                )
            return self._run(statement, consume, positional=tuple(params))
        if isinstance(statement, str):
            statement = sa.text(statement)
        return self._run(statement, consume, parameters=params)

    def _run(
        self,
        statement: Any,
        consume: Optional[Callable[[CursorResult], Any]] = None,
        *,
        parameters: Optional[Mapping[str, Any]] = None,
        positional: Optional[tuple[Any, ...]] = None,
    ) -> Any:
        """
        Execute ``statement``, committing it when it started its own transaction.
        """

        connection = self.connection
        began = not connection.in_transaction()
        try:
            if positional is not None:
                result = connection.exec_driver_sql(statement, positional)
            elif parameters is not None:
                result = connection.execute(statement, dict(parameters))
            else:
                result = connection.execute(statement)
            value = consume(result) if consume is not None else result
        except Exception:
            if began and connection.in_transaction():
                connection.rollback()
            raise
        if began and connection.in_transaction():
            connection.commit()
        return value
