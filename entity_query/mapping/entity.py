"""Resolved entity mappings.

An EntityMapping is built once per entity type by a metadata resolver and
shared read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from entity_query.core.exceptions import MappingError


@dataclass(frozen=True)
class EntityMapping:
    """Correspondence between one entity type and its table.

    Attributes:
        entity_name: Entity type name (``Order``).
        table_name: Storage table name (``order``).
        attribute_to_column: attribute -> column, in declaration order.
        primary_key_attributes: Attributes forming the primary key.
        auto_generated_columns: column -> attribute for values the database
            generates on insert.
    """

    entity_name: str
    table_name: str
    attribute_to_column: Mapping[str, str]
    primary_key_attributes: tuple[str, ...] = ()
    auto_generated_columns: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "attribute_to_column", MappingProxyType(dict(self.attribute_to_column))
        )
        object.__setattr__(
            self,
            "auto_generated_columns",
            MappingProxyType(dict(self.auto_generated_columns)),
        )
        object.__setattr__(self, "primary_key_attributes", tuple(self.primary_key_attributes))

        unknown = [a for a in self.primary_key_attributes if a not in self.attribute_to_column]
        columns = set(self.attribute_to_column.values())
        for column, attribute in self.auto_generated_columns.items():
            if column not in columns or self.attribute_to_column.get(attribute) != column:
                unknown.append(attribute)
        if unknown:
            raise MappingError(
                f"Entity '{self.entity_name}' declares keys on unmapped attributes {unknown}"
            )

    @property
    def attributes(self) -> list[str]:
        return list(self.attribute_to_column)

    @property
    def auto_generated_attributes(self) -> list[str]:
        return list(self.auto_generated_columns.values())

    @property
    def insertable_attributes(self) -> list[str]:
        """Attributes written by an INSERT (everything not auto-generated)."""
        generated = set(self.auto_generated_columns.values())
        return [a for a in self.attribute_to_column if a not in generated]

    @property
    def non_key_attributes(self) -> list[str]:
        keys = set(self.primary_key_attributes)
        return [a for a in self.attribute_to_column if a not in keys]

    def has_attribute(self, attribute: str) -> bool:
        return attribute in self.attribute_to_column

    def column_for(self, attribute: str) -> str:
        """Column mapped to *attribute*.

        Raises:
            MappingError: If the attribute is not mapped.
        """
        try:
            return self.attribute_to_column[attribute]
        except KeyError:
            raise MappingError(
                f"The column associated with the attribute '{attribute}' "
                f"of the entity '{self.entity_name}' doesn't exist"
            ) from None

    def attribute_for(self, column: str) -> str:
        """Attribute mapped to *column* (case-insensitive).

        Raises:
            MappingError: If no attribute maps to the column.
        """
        wanted = column.lower()
        for attribute, mapped in self.attribute_to_column.items():
            if mapped.lower() == wanted:
                return attribute
        raise MappingError(
            f"The attribute associated with the column '{column}' "
            f"of the table '{self.table_name}' doesn't exist"
        )
