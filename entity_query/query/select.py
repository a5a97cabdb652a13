"""SELECT statement builder."""

from __future__ import annotations

from typing import Any

from entity_query.core.driver import Driver
from entity_query.core.exceptions import BadCountError, ColumnMismatchError
from entity_query.mapping.accessor import accessor_for, entity_name
from entity_query.mapping.resolver import MetadataResolver
from entity_query.query.base import Statement
from entity_query.query.clauses import (
    FromClause,
    JoinClause,
    LimitClause,
    OrderByClause,
    WhereClause,
    flatten,
)
from entity_query.query.context import QueryContext


class SelectStatement(
    FromClause, JoinClause, WhereClause, OrderByClause, LimitClause, Statement
):
    """``SELECT list FROM ... JOIN ... WHERE ... ORDER BY ... LIMIT ...``.

    Example:
        >>> source.select("*").from_("Order").where("id = ?", 7).get_one_result()
        {'id': 7, 'customerId': 42, 'total': 19.99}
    """

    def __init__(self, driver: Driver, resolver: MetadataResolver, *attributes: Any) -> None:
        super().__init__(driver, resolver)
        self._select: list[str] = flatten(attributes)

    def _render(self, ctx: QueryContext) -> str:
        # Classes must be registered before the select list is resolved.
        tables = self._generate_from(ctx) + self._generate_join(ctx)
        select_list = ", ".join(ctx.select_item(item) for item in self._select or ["*"])
        return (
            f"SELECT {select_list}{tables}"
            + self._generate_where(ctx)
            + self._generate_order_by(ctx)
            + self._generate_limit(ctx)
        )

    def execute(self) -> list[dict[str, Any]]:
        """Run the statement and return rows keyed by attribute name."""
        return self._fetch()[0]

    def get_results(self) -> list[dict[str, Any]]:
        return self.execute()

    def get_one_result(self) -> dict[str, Any]:
        """Return the single result row.

        Raises:
            BadCountError: If the query returned zero or several rows.
        """
        rows = self.execute()
        if len(rows) != 1:
            raise BadCountError("result", len(rows))
        return rows[0]

    def get_objects(
        self, entity_class: type, index_attribute: str | None = None
    ) -> list[Any] | dict[Any, Any]:
        """Build an *entity_class* instance from every row.

        Args:
            entity_class: Class to instantiate.
            index_attribute: When given, key the result by this attribute.

        Returns:
            A list of entities, or a dict keyed by *index_attribute*.
        """
        rows, ctx = self._fetch()
        name = entity_name(entity_class)
        # Rows of a multi-class query are keyed by qualifier (class name or alias).
        prefixes = [
            rc.qualifier + "."
            for rc in ctx.classes.values()
            if rc.mapping.entity_name == name
        ] or [name + "."]
        objects = [self._build(entity_class, row, prefixes) for row in rows]
        if index_attribute is None:
            return objects
        accessor = accessor_for(entity_class)
        return {accessor.get(obj, index_attribute): obj for obj in objects}

    def get_one_object(self, entity_class: type) -> Any:
        """Return the single entity built from the result.

        Raises:
            BadCountError: If the query returned zero or several rows.
        """
        objects = self.get_objects(entity_class)
        if len(objects) != 1:
            raise BadCountError("object", len(objects))
        return objects[0]

    def _fetch(self) -> tuple[list[dict[str, Any]], QueryContext]:
        sql, ctx = self._generate_context()
        return self._driver.execute_select(sql, list(ctx.arguments)), ctx

    @staticmethod
    def _build(entity_class: type, row: dict[str, Any], prefixes: list[str]) -> Any:
        values: dict[str, Any] = {}
        for key, value in row.items():
            if "." not in key:
                values[key] = value
                continue
            prefix = next((p for p in prefixes if key.startswith(p)), None)
            # With a self-join the first qualifier of the class wins.
            if prefix is not None:
                values.setdefault(key[len(prefix) :], value)
        if row and not values:
            raise ColumnMismatchError(entity_class.__name__, sorted(row))
        return accessor_for(entity_class).build(values)
