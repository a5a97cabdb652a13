"""Declarative schema documents.

One document describes one entity::

    {
        "table": "order",
        "attributes": {
            "id": {"column": "order_id", "primary": true, "auto_increment": true},
            "customerId": {},
            "total": {}
        }
    }

``table`` defaults to the snake_case entity name and ``column`` to
``<table>_<snake_case attribute>``.
"""

from __future__ import annotations

from pydantic import BaseModel

from entity_query.mapping.entity import EntityMapping
from entity_query.mapping.naming import column_name_for_attribute, table_name_for_entity


class AttributeSchema(BaseModel):
    """Storage description of one attribute."""

    column: str | None = None
    primary: bool = False
    auto_increment: bool = False


class EntitySchema(BaseModel):
    """Storage description of one entity."""

    table: str | None = None
    attributes: dict[str, AttributeSchema]

    def to_mapping(self, entity_name: str) -> EntityMapping:
        """Build the EntityMapping this document describes."""
        table = self.table or table_name_for_entity(entity_name)
        attribute_to_column: dict[str, str] = {}
        primary: list[str] = []
        generated: dict[str, str] = {}

        for attribute, entry in self.attributes.items():
            column = entry.column or column_name_for_attribute(attribute, table)
            attribute_to_column[attribute] = column
            if entry.primary:
                primary.append(attribute)
            if entry.auto_increment:
                generated[column] = attribute

        return EntityMapping(
            entity_name=entity_name,
            table_name=table,
            attribute_to_column=attribute_to_column,
            primary_key_attributes=tuple(primary),
            auto_generated_columns=generated,
        )
