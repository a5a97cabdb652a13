"""MySQL adapter (mysql-connector-python)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from entity_query.core.connection import ConnectionConfig
from entity_query.core.exceptions import ConnectionError, PoolError  # noqa: A004


class MysqlAdapter:
    """Synchronous MySQL adapter using mysql-connector-python."""

    @property
    def paramstyle(self) -> str:
        return "format"

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        """Create a pool (list of connections) for MySQL."""
        import mysql.connector

        pool: list[Any] = []
        for _ in range(config.pool_size):
            try:
                conn = mysql.connector.connect(
                    host=config.host,
                    port=config.port,
                    user=config.user,
                    password=config.password,
                    database=config.database,
                    connection_timeout=config.pool_timeout,
                    **config.extra,
                )
            except mysql.connector.Error as e:
                raise ConnectionError(f"Cannot connect to MySQL: {e}") from e
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[Any]) -> Any:
        """Acquire a connection from the pool."""
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: Sequence[Any] = (),
    ) -> Any:
        """Execute SQL and return a cursor with dictionary results."""
        cursor = connection.cursor(dictionary=True)
        cursor.execute(sql, tuple(params))
        return cursor

    def last_insert_id(self, cursor: Any, name: str | None = None) -> Any:
        """Return AUTO_INCREMENT value of the last insert; *name* is ignored."""
        return cursor.lastrowid
