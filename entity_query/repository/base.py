"""Repository base class.

Thin wrapper over EntitySource for DDD-oriented usage.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from entity_query.core.exceptions import MappingError
from entity_query.mapping.accessor import entity_name
from entity_query.source import EntitySource

T = TypeVar("T")


class Repository(Generic[T]):
    """Base repository class for one entity class.

    Subclasses add concrete finders built from ``self.source`` statements.

    Args:
        source: Entity source the repository delegates to.
        entity_class: Class of the entities it stores.
    """

    def __init__(self, source: EntitySource, entity_class: type[T]) -> None:
        self.source = source
        self.entity_class = entity_class
        self.entity_name = entity_name(entity_class)

    def add(self, entity: T) -> int:
        return self.source.insert_one(entity)

    def load(self, entity: T) -> None:
        self.source.select_one(entity)

    def save(self, entity: T) -> int:
        return self.source.update_one(entity)

    def remove(self, entity: T) -> int:
        return self.source.delete_one(entity)

    def find_all(self, order_by: str | None = None) -> list[T]:
        """All stored entities, optionally ordered by one attribute (ascending)."""
        statement = self.source.select("*").from_(self.entity_name)
        if order_by is not None:
            statement.order_by_asc(order_by)
        return statement.get_objects(self.entity_class)  # type: ignore[return-value]

    def get(self, **primary_key: Any) -> T:
        """The entity whose primary key attributes equal *primary_key*.

        Raises:
            MappingError: If the keyword names don't match the primary key.
            BadCountError: If no entity matches.
        """
        mapping = self.source.resolver.resolve(self.entity_name)
        if not primary_key or set(primary_key) != set(mapping.primary_key_attributes):
            raise MappingError(
                f"Primary key of '{self.entity_name}' is "
                f"{list(mapping.primary_key_attributes)}, got {sorted(primary_key)}"
            )
        statement = self.source.select("*").from_(self.entity_name)
        for attribute, value in primary_key.items():
            statement.where(f"{attribute} = ?", value)
        return statement.get_one_object(self.entity_class)  # type: ignore[no-any-return]
