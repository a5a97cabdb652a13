"""Entity metadata resolvers.

A resolver answers ``resolve(entity_name) -> EntityMapping`` and memoizes
every mapping for its own lifetime. Two strategies are provided:

* LiveSchemaResolver reads the database catalog (INFORMATION_SCHEMA) once,
  at construction, and derives entity and attribute names from table and
  column names.
* DeclarativeSchemaResolver reads one schema document per entity the first
  time that entity is requested.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import ValidationError

from entity_query.core.exceptions import ExecutionError, MappingError
from entity_query.mapping.entity import EntityMapping
from entity_query.mapping.naming import attribute_name_for_column, entity_name_for_table
from entity_query.mapping.schema import EntitySchema

if TYPE_CHECKING:
    from entity_query.core.driver import Driver

logger = logging.getLogger(__name__)

_CATALOG_QUERY = (
    "SELECT column_name, table_name, column_key, extra "
    "FROM INFORMATION_SCHEMA.columns WHERE table_schema = ? "
    "ORDER BY table_name, ordinal_position"
)


@runtime_checkable
class MetadataResolver(Protocol):
    """Contract every resolution strategy satisfies."""

    def resolve(self, entity_name: str) -> EntityMapping:
        """Return the mapping of *entity_name*.

        Raises:
            MappingError: If the entity is unknown.
        """
        ...

    def entity_for_table(self, table_name: str) -> str:
        """Return the entity name mapped to *table_name*."""
        ...

    def attribute_for_column(self, table_name: str, column_name: str) -> str:
        """Return the attribute mapped to *column_name* of *table_name*."""
        ...

    def column_for_attribute(self, entity_name: str, attribute: str) -> str:
        """Return the column mapped to *attribute* (``attr`` or ``Entity.attr``)."""
        ...


class _CachingResolver:
    """Memoizing base shared by the built-in strategies.

    Reads are lock-free once a mapping is cached; populating the cache is
    serialized so that an entity is never loaded twice.
    """

    def __init__(self) -> None:
        self._mappings: dict[str, EntityMapping] = {}
        self._tables: dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def entity_names(self) -> list[str]:
        """Names of the entities resolved so far, sorted alphabetically."""
        return sorted(self._mappings)

    def resolve(self, entity_name: str) -> EntityMapping:
        mapping = self._mappings.get(entity_name)
        if mapping is not None:
            return mapping
        with self._lock:
            mapping = self._mappings.get(entity_name)
            if mapping is None:
                mapping = self._load(entity_name)
                self._store(mapping)
        return mapping

    def entity_for_table(self, table_name: str) -> str:
        try:
            return self._tables[table_name]
        except KeyError:
            raise MappingError(
                f"The entity associated with the table '{table_name}' doesn't exist"
            ) from None

    def attribute_for_column(self, table_name: str, column_name: str) -> str:
        return self.resolve(self.entity_for_table(table_name)).attribute_for(column_name)

    def column_for_attribute(self, entity_name: str, attribute: str) -> str:
        qualifier, dot, name = attribute.partition(".")
        if dot:
            entity_name, attribute = qualifier, name
        return self.resolve(entity_name).column_for(attribute)

    def _store(self, mapping: EntityMapping) -> None:
        self._mappings[mapping.entity_name] = mapping
        self._tables[mapping.table_name] = mapping.entity_name
        logger.debug("Resolved %s -> %s", mapping.entity_name, mapping.table_name)

    def _load(self, entity_name: str) -> EntityMapping:
        raise MappingError(f"The table associated with the entity '{entity_name}' doesn't exist")


class LiveSchemaResolver(_CachingResolver):
    """Resolve mappings from the live database catalog.

    Every table of the current database is read in one catalog query at
    construction; ``resolve`` never touches the database afterwards.

    Args:
        driver: Driver used for the catalog query.

    Raises:
        MappingError: If the catalog query cannot execute.
    """

    def __init__(self, driver: Driver) -> None:
        super().__init__()
        database = driver.current_database_name()
        try:
            rows = driver.execute_select(_CATALOG_QUERY, [database])
        except ExecutionError as e:
            raise MappingError(f"Cannot read the catalog of '{database}': {e}") from e

        for mapping in _mappings_from_catalog(rows):
            self._store(mapping)
        logger.info("Loaded %d entity mapping(s) from '%s'", len(self._mappings), database)


def _mappings_from_catalog(rows: list[dict[str, Any]]) -> list[EntityMapping]:
    """Group catalog rows by table and build one mapping per table."""
    tables: dict[str, dict[str, Any]] = {}
    for raw in rows:
        row = {key.lower(): value for key, value in raw.items()}
        table = row["table_name"]
        column = row["column_name"]
        info = tables.setdefault(table, {"columns": {}, "primary": [], "generated": {}})

        attribute = attribute_name_for_column(column, table)
        info["columns"][attribute] = column
        if (row.get("column_key") or "").upper() == "PRI":
            info["primary"].append(attribute)
        if "auto_increment" in (row.get("extra") or "").lower():
            info["generated"][column] = attribute

    return [
        EntityMapping(
            entity_name=entity_name_for_table(table),
            table_name=table,
            attribute_to_column=info["columns"],
            primary_key_attributes=tuple(info["primary"]),
            auto_generated_columns=info["generated"],
        )
        for table, info in tables.items()
    ]


class DeclarativeSchemaResolver(_CachingResolver):
    """Resolve mappings from per-entity schema documents.

    Documents are looked up in *schemas* first, then read from
    ``<schema_path>/<EntityName>.json``, on first request.

    Args:
        schema_path: Directory of JSON schema documents.
        schemas: Inline schema documents keyed by entity name.
    """

    def __init__(
        self,
        schema_path: Path | str | None = None,
        schemas: Mapping[str, EntitySchema | dict[str, Any]] | None = None,
    ) -> None:
        super().__init__()
        self._schema_path = Path(schema_path) if schema_path is not None else None
        self._schemas = dict(schemas or {})

    def _load(self, entity_name: str) -> EntityMapping:
        return self._read_schema(entity_name).to_mapping(entity_name)

    def _read_schema(self, entity_name: str) -> EntitySchema:
        try:
            if entity_name in self._schemas:
                document = self._schemas[entity_name]
                if isinstance(document, EntitySchema):
                    return document
                return EntitySchema.model_validate(document)

            if self._schema_path is not None:
                path = self._schema_path / f"{entity_name}.json"
                if path.is_file():
                    logger.debug("Parsing schema %s", path)
                    return EntitySchema.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise MappingError(f"Invalid schema for entity '{entity_name}': {e}") from e

        return super()._load(entity_name)
