"""EntityQuery exception hierarchy.

Driver exceptions are never exposed raw: they are wrapped in
StatementExecutionError and chained with ``from``.
"""

from __future__ import annotations


class EntityQueryError(Exception):
    """Base exception for all EntityQuery errors."""


# --- Mapping ---


class MappingError(EntityQueryError):
    """Raised when an entity, table, column or attribute cannot be resolved."""


class AmbiguousAttributeError(MappingError):
    """Raised when a bare attribute name matches more than one queried class."""

    def __init__(self, attribute: str, qualifiers: list[str]) -> None:
        self.attribute = attribute
        self.qualifiers = qualifiers
        super().__init__(
            f"Attribute '{attribute}' is ambiguous, qualify it with one of {qualifiers}"
        )


class ColumnMismatchError(MappingError):
    """Raised when a result row cannot be turned into an entity instance."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: {missing_fields}")


class MappingFactoryError(EntityQueryError):
    """Raised when a metadata resolver strategy cannot be created."""


# --- Execution ---


class ExecutionError(EntityQueryError):
    """Base for statement execution errors."""


class BadCountError(ExecutionError):
    """Raised when a read expected exactly one row and got another count."""

    def __init__(self, kind: str, count: int) -> None:
        self.kind = kind
        self.count = count
        super().__init__(f"The query has returned an invalid {kind} quantity ({count})")


class StatementKindError(ExecutionError):
    """Raised when a statement is dispatched through the wrong driver verb."""

    def __init__(self, expected: str, sql: str) -> None:
        self.expected = expected
        self.sql = sql
        super().__init__(f"There is no {expected} instruction in: {sql}")


class StatementSyntaxError(ExecutionError):
    """Raised when a SQL fragment contains an unterminated literal."""


class StatementExecutionError(ExecutionError):
    """Raised when the database driver rejects a statement.

    The driver exception is not re-raised itself: it is logged, then kept as
    ``__cause__`` of this error (``raise ... from``), so callers can still
    inspect the original driver error.
    """

    def __init__(self, sql: str, detail: str) -> None:
        self.sql = sql
        super().__init__(f"Statement failed: {detail} in {sql}")


# --- Adapter ---


class AdapterError(EntityQueryError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
