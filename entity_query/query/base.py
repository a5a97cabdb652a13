"""Statement base class."""

from __future__ import annotations

from typing import Any

from entity_query.core.driver import Driver
from entity_query.mapping.resolver import MetadataResolver
from entity_query.query.context import QueryContext


class Statement:
    """A statement under construction.

    Subclasses compose clause mixins and implement ``_render``. Generation
    is idempotent: every call builds a fresh QueryContext from the
    accumulated clause state.

    Args:
        driver: Storage driver used to execute the statement.
        resolver: Metadata resolver for the referenced classes.
    """

    def __init__(self, driver: Driver, resolver: MetadataResolver) -> None:
        self._driver = driver
        self._resolver = resolver

    def generate(self) -> tuple[str, list[Any]]:
        """Render the statement.

        Returns:
            The SQL string and its positional arguments, in placeholder order.

        Raises:
            MappingError: If a class or attribute cannot be resolved.
        """
        sql, ctx = self._generate_context()
        return sql, list(ctx.arguments)

    def _generate_context(self) -> tuple[str, QueryContext]:
        ctx = QueryContext(self._resolver)
        return self._render(ctx), ctx

    @property
    def sql(self) -> str:
        return self.generate()[0]

    @property
    def args(self) -> list[Any]:
        return self.generate()[1]

    def execute(self) -> Any:
        raise NotImplementedError

    def _render(self, ctx: QueryContext) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        sql, args = self.generate()
        return f"{sql} [ {', '.join(repr(a) for a in args)} ]"
