"""EntityQuery - attribute-oriented SQL statement builders over entity mappings."""

from __future__ import annotations

from entity_query.core.config import MappingConfig
from entity_query.core.connection import ConnectionConfig, ConnectionManager
from entity_query.core.driver import Driver, SQLDriver
from entity_query.core.enums import JoinKind, ResolverStrategy
from entity_query.core.exceptions import (
    AdapterError,
    AmbiguousAttributeError,
    BadCountError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    EntityQueryError,
    ExecutionError,
    MappingError,
    MappingFactoryError,
    PoolError,
    StatementExecutionError,
    StatementKindError,
    StatementSyntaxError,
)
from entity_query.mapping import (
    DeclarativeSchemaResolver,
    EntityAccessor,
    EntityMapping,
    LiveSchemaResolver,
    MappedEntity,
    MetadataResolver,
    create_resolver,
    register_strategy,
)
from entity_query.query import (
    DeleteStatement,
    InsertStatement,
    SelectStatement,
    UpdateStatement,
)
from entity_query.repository import Repository
from entity_query.source import EntitySource

__all__ = [
    # Source
    "EntitySource",
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "MappingConfig",
    # Driver
    "Driver",
    "SQLDriver",
    # Mapping
    "EntityMapping",
    "EntityAccessor",
    "MappedEntity",
    "MetadataResolver",
    "LiveSchemaResolver",
    "DeclarativeSchemaResolver",
    "create_resolver",
    "register_strategy",
    # Statements
    "SelectStatement",
    "InsertStatement",
    "UpdateStatement",
    "DeleteStatement",
    # Repository
    "Repository",
    # Enums
    "JoinKind",
    "ResolverStrategy",
    # Exceptions
    "EntityQueryError",
    "MappingError",
    "AmbiguousAttributeError",
    "ColumnMismatchError",
    "MappingFactoryError",
    "ExecutionError",
    "BadCountError",
    "StatementKindError",
    "StatementSyntaxError",
    "StatementExecutionError",
    "AdapterError",
    "ConnectionError",
    "PoolError",
]
