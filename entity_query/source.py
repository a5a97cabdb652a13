"""Entity source facade.

EntitySource is the entry point of the library: it creates statement
builders bound to one driver and one metadata resolver, and implements the
single-entity CRUD operations on top of them.
"""

from __future__ import annotations

import logging
from typing import Any

from entity_query.core.config import MappingConfig
from entity_query.core.connection import ConnectionConfig
from entity_query.core.driver import Driver, SQLDriver
from entity_query.core.exceptions import MappingError
from entity_query.mapping.accessor import accessor_for, entity_name
from entity_query.mapping.entity import EntityMapping
from entity_query.mapping.factory import create_resolver
from entity_query.mapping.resolver import MetadataResolver
from entity_query.query.delete import DeleteStatement
from entity_query.query.insert import InsertStatement
from entity_query.query.select import SelectStatement
from entity_query.query.update import UpdateStatement

logger = logging.getLogger(__name__)


class EntitySource:
    """Statement factory and CRUD facade.

    Args:
        driver: Storage driver executing the statements.
        resolver: Metadata resolver mapping entities to tables.

    Example:
        >>> source = EntitySource.from_config(
        ...     ConnectionConfig(driver="sqlite", database=":memory:"),
        ...     MappingConfig(strategy="declarative", schema_path="schemas/"),
        ... )
        >>> order = Order(customer_id=42, total=19.99)
        >>> source.insert_one(order)
        1
        >>> order.id
        1
    """

    def __init__(self, driver: Driver, resolver: MetadataResolver) -> None:
        self._driver = driver
        self._resolver = resolver

    @classmethod
    def from_config(
        cls,
        connection_config: ConnectionConfig,
        mapping_config: MappingConfig | None = None,
    ) -> EntitySource:
        """Create a source from connection and mapping configuration.

        Raises:
            AdapterError: If the configured driver cannot be loaded.
            MappingFactoryError: If the resolver strategy cannot be built.
        """
        driver = SQLDriver.from_config(connection_config)
        resolver = create_resolver(mapping_config or MappingConfig(), driver)
        return cls(driver, resolver)

    @property
    def driver(self) -> Driver:
        return self._driver

    @property
    def resolver(self) -> MetadataResolver:
        return self._resolver

    # --- Statement builders ---

    def select(self, *attributes: str | list[str]) -> SelectStatement:
        """Start a SELECT; no attributes means ``*``."""
        return SelectStatement(self._driver, self._resolver, *attributes)

    def insert_into(self, class_name: str, *attributes: str | list[str]) -> InsertStatement:
        """Start an INSERT into *class_name*'s table."""
        return InsertStatement(self._driver, self._resolver, class_name, *attributes)

    def update(self, *class_names: str | list[str]) -> UpdateStatement:
        return UpdateStatement(self._driver, self._resolver, *class_names)

    def delete_from(self, *class_names: str | list[str]) -> DeleteStatement:
        return DeleteStatement(self._driver, self._resolver, *class_names)

    # --- Single-entity operations ---

    def insert_one(self, entity: Any) -> int:
        """Insert *entity* and copy generated keys back onto it.

        Every non auto-generated attribute is inserted. Each auto-generated
        attribute is then set to the id reported by the driver.

        Returns:
            The affected row count.
        """
        name, mapping = self._mapping_of(entity)
        accessor = accessor_for(type(entity))
        attributes = mapping.insertable_attributes

        statement = self.insert_into(name, attributes)
        statement.bound_values(*(accessor.get(entity, a) for a in attributes))
        count = statement.execute()

        for column, attribute in mapping.auto_generated_columns.items():
            accessor.set(entity, attribute, self._driver.last_insert_id(column))
        logger.debug("Inserted %s (%d row(s))", name, count)
        return count

    def select_one(self, entity: Any) -> None:
        """Reload *entity* from the row matching its primary key.

        Raises:
            BadCountError: If no row, or more than one, matches.
            MappingError: If the entity has no primary key.
        """
        name, mapping = self._mapping_of(entity)
        accessor = accessor_for(type(entity))

        statement = self.select("*").from_(name)
        self._where_primary_key(statement, mapping, entity)
        row = statement.get_one_result()

        for attribute, value in row.items():
            accessor.set(entity, attribute, value)

    def update_one(self, entity: Any) -> int:
        """Write every non-key attribute of *entity* to its row.

        Returns:
            The affected row count.

        Raises:
            MappingError: If the entity has no primary key.
        """
        name, mapping = self._mapping_of(entity)
        accessor = accessor_for(type(entity))

        statement = self.update(name)
        for attribute in mapping.non_key_attributes:
            statement.set(attribute, accessor.get(entity, attribute))
        self._where_primary_key(statement, mapping, entity)
        return statement.execute()

    def delete_one(self, entity: Any) -> int:
        """Delete the row matching the primary key of *entity*.

        Returns:
            The affected row count.

        Raises:
            MappingError: If the entity has no primary key.
        """
        name, mapping = self._mapping_of(entity)
        statement = self.delete_from(name)
        self._where_primary_key(statement, mapping, entity)
        return statement.execute()

    def _mapping_of(self, entity: Any) -> tuple[str, EntityMapping]:
        name = entity_name(entity)
        return name, self._resolver.resolve(name)

    @staticmethod
    def _where_primary_key(statement: Any, mapping: EntityMapping, entity: Any) -> None:
        if not mapping.primary_key_attributes:
            raise MappingError(
                f"The entity '{mapping.entity_name}' has no primary key to identify a row"
            )
        accessor = accessor_for(type(entity))
        for attribute in mapping.primary_key_attributes:
            statement.where(f"{attribute} = ?", accessor.get(entity, attribute))
