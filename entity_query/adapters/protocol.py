"""Database adapter protocol.

Every adapter module MUST implement this protocol so that SQLDriver can
treat backends interchangeably.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from entity_query.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Parameter binding style: 'qmark' (?) or 'format' (%s)."""
        ...

    def create_pool(self, config: ConnectionConfig) -> Any:
        """Create a connection pool."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Acquire a connection from the pool."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Release a connection back to the pool."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close the pool and release all connections."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: Sequence[Any] = (),
    ) -> Any:
        """Execute SQL with positional parameters and return a cursor-like object."""
        ...

    def last_insert_id(self, cursor: Any, name: str | None = None) -> Any:
        """Return the id generated by the INSERT that produced *cursor*."""
        ...
