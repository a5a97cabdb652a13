"""INSERT statement builder."""

from __future__ import annotations

from typing import Any

from entity_query.core.driver import Driver
from entity_query.mapping.resolver import MetadataResolver
from entity_query.query.base import Statement
from entity_query.query.clauses import ValuesClause, flatten
from entity_query.query.context import QueryContext


class InsertStatement(ValuesClause, Statement):
    """``INSERT INTO table (columns) VALUES (...)[, (...)]``.

    The target class is resolved at construction. Without an explicit
    attribute list every mapped attribute except the auto-generated ones
    is inserted, in declaration order.
    """

    def __init__(
        self,
        driver: Driver,
        resolver: MetadataResolver,
        class_name: str,
        *attributes: Any,
    ) -> None:
        super().__init__(driver, resolver)
        self._class_name = class_name
        self._mapping = resolver.resolve(class_name)
        self._attributes: list[str] = flatten(attributes)

    @property
    def attributes(self) -> list[str]:
        """Attributes listed in the column list, in order."""
        if self._attributes:
            return [a.rsplit(".", 1)[-1] for a in self._attributes]
        return self._mapping.insertable_attributes

    def _render(self, ctx: QueryContext) -> str:
        table = ctx.add_class(self._class_name)
        columns = ", ".join(self._mapping.column_for(a) for a in self.attributes)
        return f"INSERT INTO {table} ({columns})" + self._generate_values(ctx)

    def execute(self) -> int:
        """Run the statement and return the affected row count."""
        sql, args = self.generate()
        return self._driver.execute_insert(sql, args)
