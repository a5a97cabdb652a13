"""Mapping layer - entity metadata and attribute access."""

from __future__ import annotations

from entity_query.mapping.accessor import (
    EntityAccessor,
    MappedEntity,
    accessor_for,
    entity_name,
)
from entity_query.mapping.entity import EntityMapping
from entity_query.mapping.factory import create_resolver, register_strategy
from entity_query.mapping.resolver import (
    DeclarativeSchemaResolver,
    LiveSchemaResolver,
    MetadataResolver,
)
from entity_query.mapping.schema import AttributeSchema, EntitySchema

__all__ = [
    "EntityMapping",
    "EntitySchema",
    "AttributeSchema",
    "EntityAccessor",
    "MappedEntity",
    "accessor_for",
    "entity_name",
    "MetadataResolver",
    "LiveSchemaResolver",
    "DeclarativeSchemaResolver",
    "create_resolver",
    "register_strategy",
]
