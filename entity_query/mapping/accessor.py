"""Entity attribute access.

The query layer reads and writes entity attributes by *attribute name*
(``customerId``). An EntityAccessor, built once per entity class, resolves
those names to Python attributes (``customer_id``) and constructs new
instances from result rows.

Supports dataclasses, Pydantic models, plain classes, and classes that
implement the MappedEntity protocol themselves.
"""

from __future__ import annotations

import dataclasses
import inspect
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from entity_query.core.exceptions import ColumnMismatchError, MappingError
from entity_query.mapping.naming import snake_case


@runtime_checkable
class MappedEntity(Protocol):
    """Entities that expose their attributes by name."""

    def get_attribute(self, name: str) -> Any:
        ...

    def set_attribute(self, name: str, value: Any) -> None:
        ...


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _get_field_names(cls: type) -> list[str]:
    """Extract field names from a class (dataclass, Pydantic, or plain)."""
    # Pydantic model
    if hasattr(cls, "model_fields"):
        return list(cls.model_fields.keys())

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    # Plain class - use __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
        return [
            name
            for name, param in sig.parameters.items()
            if name != "self" and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
        ]
    except (ValueError, TypeError):
        return []


def entity_name(entity: Any) -> str:
    """Entity type name of an instance or class.

    The class name, unless the class sets ``__entity__``.
    """
    cls = entity if isinstance(entity, type) else type(entity)
    return getattr(cls, "__entity__", cls.__name__)


class EntityAccessor:
    """Attribute-name access to instances of one entity class.

    Args:
        entity_class: The entity class.
    """

    def __init__(self, entity_class: type) -> None:
        self._entity_class = entity_class
        self._fields = _get_field_names(entity_class)
        self._names: dict[str, str] = {}
        self._is_pydantic = _is_pydantic_model(entity_class)
        self._is_mapped = isinstance(entity_class, type) and all(
            callable(getattr(entity_class, m, None)) for m in ("get_attribute", "set_attribute")
        )

    @property
    def entity_class(self) -> type:
        return self._entity_class

    def python_name(self, attribute: str) -> str:
        """Python attribute holding *attribute*.

        Raises:
            MappingError: If the class has no matching attribute.
        """
        if attribute in self._names:
            return self._names[attribute]

        candidates = [attribute, snake_case(attribute)]
        name = next((c for c in candidates if c in self._fields), None)
        if name is None:
            name = next((c for c in candidates if hasattr(self._entity_class, c)), None)
        if name is None:
            raise MappingError(
                f"{self._entity_class.__name__} has no attribute for '{attribute}'"
            )
        self._names[attribute] = name
        return name

    def get(self, entity: Any, attribute: str) -> Any:
        """Current value of *attribute* on *entity*."""
        if self._is_mapped:
            return entity.get_attribute(attribute)
        return getattr(entity, self.python_name(attribute))

    def set(self, entity: Any, attribute: str, value: Any) -> None:
        """Assign *value* to *attribute* on *entity*."""
        if self._is_mapped:
            entity.set_attribute(attribute, value)
            return
        setattr(entity, self.python_name(attribute), value)

    def build(self, values: dict[str, Any]) -> Any:
        """Create a new instance from attribute values.

        Detection order:
        1. MappedEntity -> no-argument construction, then set_attribute
        2. Pydantic BaseModel -> model_validate(kwargs)
        3. dataclass / plain class -> entity_class(**kwargs)

        Raises:
            ColumnMismatchError: If the instance cannot be constructed.
        """
        if self._is_mapped:
            try:
                entity = self._entity_class()
            except TypeError as e:
                raise ColumnMismatchError(self._entity_class.__name__, [str(e)]) from e
            for attribute, value in values.items():
                entity.set_attribute(attribute, value)
            return entity

        kwargs = {self.python_name(attribute): value for attribute, value in values.items()}

        if self._is_pydantic:
            try:
                return self._entity_class.model_validate(kwargs)  # type: ignore[attr-defined]
            except Exception as e:
                raise ColumnMismatchError(self._entity_class.__name__, [str(e)]) from e

        try:
            return self._entity_class(**kwargs)
        except TypeError as e:
            raise ColumnMismatchError(self._entity_class.__name__, [str(e)]) from e


@lru_cache(maxsize=None)
def accessor_for(entity_class: type) -> EntityAccessor:
    """Shared EntityAccessor for *entity_class*."""
    return EntityAccessor(entity_class)
