"""Resolver strategy registration.

Strategies are registered by name and looked up once, when a data source is
created. The configured name must be registered and its factory must build
an object satisfying the MetadataResolver protocol.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from entity_query.core.enums import ResolverStrategy
from entity_query.core.exceptions import MappingFactoryError
from entity_query.mapping.resolver import (
    DeclarativeSchemaResolver,
    LiveSchemaResolver,
    MetadataResolver,
)

if TYPE_CHECKING:
    from entity_query.core.config import MappingConfig
    from entity_query.core.driver import Driver

ResolverFactory = Callable[["MappingConfig", "Driver"], MetadataResolver]

_STRATEGIES: dict[str, ResolverFactory] = {
    ResolverStrategy.LIVE.value: lambda config, driver: LiveSchemaResolver(driver),
    ResolverStrategy.DECLARATIVE.value: lambda config, driver: DeclarativeSchemaResolver(
        config.schema_path, config.schemas
    ),
}


def register_strategy(name: str, factory: ResolverFactory) -> None:
    """Register a resolver factory under *name*, replacing any previous one.

    Raises:
        MappingFactoryError: If *factory* is not callable.
    """
    if not callable(factory):
        raise MappingFactoryError(f"Resolver factory for '{name}' is not callable")
    _STRATEGIES[name.lower()] = factory


def registered_strategies() -> list[str]:
    """Registered strategy names, sorted alphabetically."""
    return sorted(_STRATEGIES)


def create_resolver(config: MappingConfig, driver: Driver) -> MetadataResolver:
    """Build the resolver selected by *config*.

    Raises:
        MappingFactoryError: If the strategy is unknown, cannot be
            instantiated, or does not satisfy the MetadataResolver protocol.
        MappingError: If the strategy itself fails to load metadata.
    """
    name = str(config.strategy).lower()
    try:
        factory = _STRATEGIES[name]
    except KeyError:
        raise MappingFactoryError(
            f"Unknown resolver strategy '{config.strategy}'; "
            f"registered: {registered_strategies()}"
        ) from None

    try:
        resolver = factory(config, driver)
    except TypeError as e:
        raise MappingFactoryError(f"Resolver strategy '{name}' isn't instantiable: {e}") from e

    if not isinstance(resolver, MetadataResolver):
        raise MappingFactoryError(
            f"Resolver strategy '{name}' doesn't implement the resolver interface"
        )
    return resolver
