"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from entity_query.core.connection import ConnectionConfig
from entity_query.mapping.resolver import DeclarativeSchemaResolver
from entity_query.source import EntitySource

SHOP_SCHEMAS: dict[str, dict[str, Any]] = {
    "Order": {
        "table": "order",
        "attributes": {
            "id": {"column": "order_id", "primary": True, "auto_increment": True},
            "customerId": {},
            "total": {},
        },
    },
    "Customer": {
        "attributes": {
            "id": {"column": "customer_id", "primary": True, "auto_increment": True},
            "name": {},
        },
    },
}


class StubDriver:
    """Driver double recording every call.

    ``rows`` is returned by every SELECT, ``affected`` by every write and
    ``last_id`` by ``last_insert_id``.
    """

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []
        self.affected = 1
        self.last_id: Any = None
        self.calls: list[tuple[str, str, list[Any]]] = []

    def execute_select(self, sql: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]:
        self.calls.append(("select", sql, list(args)))
        return [dict(row) for row in self.rows]

    def execute_insert(self, sql: str, args: Sequence[Any] = ()) -> int:
        self.calls.append(("insert", sql, list(args)))
        return self.affected

    def execute_update(self, sql: str, args: Sequence[Any] = ()) -> int:
        self.calls.append(("update", sql, list(args)))
        return self.affected

    def execute_delete(self, sql: str, args: Sequence[Any] = ()) -> int:
        self.calls.append(("delete", sql, list(args)))
        return self.affected

    def last_insert_id(self, name: str | None = None) -> Any:
        return self.last_id

    def current_database_name(self) -> str:
        return "shop"


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def stub_driver() -> StubDriver:
    return StubDriver()


@pytest.fixture
def resolver() -> DeclarativeSchemaResolver:
    """Resolver knowing ``Order`` (table ``order``) and ``Customer``."""
    return DeclarativeSchemaResolver(schemas=SHOP_SCHEMAS)


@pytest.fixture
def source(stub_driver: StubDriver, resolver: DeclarativeSchemaResolver) -> EntitySource:
    return EntitySource(stub_driver, resolver)


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Temporary directory for JSON schema documents."""
    return tmp_path / "schemas"


@pytest.fixture
def write_schema(schema_dir: Path):
    """Helper to write schema documents into the temp directory.

    Usage:
        write_schema("Order", '{"attributes": {"id": {"primary": true}}}')
    """

    def _write(entity_name: str, content: str) -> Path:
        schema_dir.mkdir(parents=True, exist_ok=True)
        file_path = schema_dir / f"{entity_name}.json"
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write
