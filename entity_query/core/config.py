"""Metadata resolution configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, model_validator

from entity_query.core.enums import ResolverStrategy
from entity_query.mapping.schema import EntitySchema


class MappingConfig(BaseModel):
    """Selects how entity mappings are resolved.

    Attributes:
        strategy: Name of a registered resolver strategy. ``live`` reads the database catalog once at startup,
            ``declarative`` reads per-entity schema documents on demand.
        schema_path: Directory holding ``<EntityName>.json`` documents
            (declarative strategy).
        schemas: Inline schema documents keyed by entity name (declarative
            strategy). Takes precedence over files in ``schema_path``.
    """

    strategy: str = ResolverStrategy.LIVE.value
    schema_path: Path | None = None
    schemas: dict[str, EntitySchema] | None = None

    @model_validator(mode="after")
    def _check_schema_source(self) -> MappingConfig:
        if (
            self.strategy == ResolverStrategy.DECLARATIVE.value
            and self.schema_path is None
            and self.schemas is None
        ):
            raise ValueError("the declarative strategy needs schema_path or schemas")
        return self
