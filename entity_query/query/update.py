"""UPDATE statement builder."""

from __future__ import annotations

from typing import Any

from entity_query.core.driver import Driver
from entity_query.mapping.resolver import MetadataResolver
from entity_query.query.base import Statement
from entity_query.query.clauses import (
    LimitClause,
    OrderByClause,
    SetClause,
    WhereClause,
    flatten,
)
from entity_query.query.context import QueryContext


class UpdateStatement(SetClause, WhereClause, OrderByClause, LimitClause, Statement):
    """``UPDATE table[, table] SET ... WHERE ... ORDER BY ... LIMIT ...``."""

    def __init__(self, driver: Driver, resolver: MetadataResolver, *class_names: Any) -> None:
        super().__init__(driver, resolver)
        self._targets: list[str] = flatten(class_names)

    def _render(self, ctx: QueryContext) -> str:
        tables = ", ".join(ctx.add_class(name) for name in self._targets)
        return (
            f"UPDATE {tables}"
            + self._generate_set(ctx)
            + self._generate_where(ctx)
            + self._generate_order_by(ctx)
            + self._generate_limit(ctx)
        )

    def execute(self) -> int:
        """Run the statement and return the affected row count."""
        sql, args = self.generate()
        return self._driver.execute_update(sql, args)
