"""SQLite adapter (sqlite3 stdlib)."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from entity_query.core.connection import ConnectionConfig
from entity_query.core.exceptions import PoolError


class SqliteAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            conn = sqlite3.connect(config.database)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: Sequence[Any] = (),
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, tuple(params))

    def last_insert_id(self, cursor: sqlite3.Cursor, name: str | None = None) -> Any:
        """SQLite has one rowid per insert; *name* is ignored."""
        return cursor.lastrowid
