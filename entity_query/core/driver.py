"""Storage driver.

The driver is the only component that talks to the database. Statement
builders hand it a SQL string with ``?`` placeholders plus the ordered
argument list; it normalizes placeholders for the adapter, executes, and
decodes rows into dicts.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from entity_query.core.connection import ConnectionConfig, ConnectionManager
from entity_query.core.exceptions import StatementExecutionError, StatementKindError
from entity_query.core.params import coerce_params, normalize_params

logger = logging.getLogger(__name__)

# Matches the first SQL keyword (used for verb checks)
_FIRST_KEYWORD = re.compile(r"^\s*(\w+)")


@runtime_checkable
class Driver(Protocol):
    """Parameterized-query execution interface consumed by statement builders."""

    def execute_select(self, sql: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run a SELECT and return its rows as dicts."""
        ...

    def execute_insert(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Run an INSERT and return the affected row count."""
        ...

    def execute_update(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Run an UPDATE and return the affected row count."""
        ...

    def execute_delete(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Run a DELETE and return the affected row count."""
        ...

    def last_insert_id(self, name: str | None = None) -> Any:
        """Return the id generated by the last INSERT."""
        ...

    def current_database_name(self) -> str:
        """Return the name of the database the driver is connected to."""
        ...


def _rows_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor results to list of dicts.

    Handles both tuple-like rows and dict-like rows from different adapters.
    """
    if cursor.description is None:
        return []
    columns = [desc[0] for desc in cursor.description]
    rows = cursor.fetchall()
    if not rows:
        return []

    # Already dict-like (MySQL dictionary cursor)
    if isinstance(rows[0], dict):
        return [dict(row) for row in rows]

    return [dict(zip(columns, row, strict=True)) for row in rows]


def _check_verb(sql: str, verb: str) -> None:
    """Raise if the leading keyword of *sql* is not *verb*."""
    match = _FIRST_KEYWORD.match(sql)
    if match is None or match.group(1).upper() != verb:
        raise StatementKindError(verb, sql)


class SQLDriver:
    """Driver executing statements through a ConnectionManager.

    Write statements are committed immediately; transaction control is left
    to the database's autocommit semantics. The cursor of the last write is
    kept per thread, so ``last_insert_id`` reports the caller's own insert.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager
        self._paramstyle: str = connection_manager.adapter.paramstyle
        self._local = threading.local()

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> SQLDriver:
        """Create a driver from a ConnectionConfig."""
        return cls(ConnectionManager(config))

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    def execute_select(self, sql: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run a SELECT statement and return its rows as dicts."""
        _check_verb(sql, "SELECT")
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, sql, args)
            return _rows_to_dicts(cursor)

    def execute_insert(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Run an INSERT statement. Returns affected row count."""
        _check_verb(sql, "INSERT")
        return self._execute_write(sql, args)

    def execute_update(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Run an UPDATE statement. Returns affected row count."""
        _check_verb(sql, "UPDATE")
        return self._execute_write(sql, args)

    def execute_delete(self, sql: str, args: Sequence[Any] = ()) -> int:
        """Run a DELETE statement. Returns affected row count."""
        _check_verb(sql, "DELETE")
        return self._execute_write(sql, args)

    def last_insert_id(self, name: str | None = None) -> Any:
        """Return the id generated by the last write run by the calling thread.

        Args:
            name: Sequence or column name, for backends that need one.
        """
        cursor = getattr(self._local, "last_cursor", None)
        if cursor is None:
            return None
        return self._connection_manager.adapter.last_insert_id(cursor, name)

    def current_database_name(self) -> str:
        return self._connection_manager.config.database

    def _execute_write(self, sql: str, args: Sequence[Any]) -> int:
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, sql, args)
            conn.commit()
            self._local.last_cursor = cursor
            return int(cursor.rowcount)

    def _execute(self, conn: Any, sql: str, args: Sequence[Any]) -> Any:
        params = coerce_params(args)
        logger.debug("Executing %s with %d argument(s)", sql, len(params))
        try:
            return self._connection_manager.adapter.execute(
                conn, normalize_params(sql, self._paramstyle), params
            )
        except Exception as e:
            logger.error("Error %s in %s with %r", e, sql, params)
            raise StatementExecutionError(sql, str(e)) from e
