"""Clause builders.

Each clause is a mixin holding its own fragment state. Public methods
accumulate and return the statement for chaining; ``_generate_*`` methods
render the fragment (empty string when the clause is unused) and bind the
clause's arguments into the QueryContext.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, TypeVar

from entity_query.core.enums import JoinKind
from entity_query.query.context import QueryContext

_From = TypeVar("_From", bound="FromClause")
_Join = TypeVar("_Join", bound="JoinClause")
_Where = TypeVar("_Where", bound="WhereClause")
_OrderBy = TypeVar("_OrderBy", bound="OrderByClause")
_Limit = TypeVar("_Limit", bound="LimitClause")
_Set = TypeVar("_Set", bound="SetClause")
_Values = TypeVar("_Values", bound="ValuesClause")

# Leading integer, the way a lenient numeric cast reads "12abc" as 12
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def flatten(values: Iterable[Any]) -> list[Any]:
    """Accept ``f('a', 'b')`` and ``f(['a', 'b'])`` alike."""
    values = list(values)
    if len(values) == 1 and isinstance(values[0], (list, tuple)):
        return list(values[0])
    return values


def to_int(value: Any) -> int:
    """Coerce *value* to an int; anything non-numeric becomes 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


class FromClause:
    """``FROM table[ AS alias], ...``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._from: list[str] = []

    def from_(self: _From, *class_names: str | list[str]) -> _From:
        """Add classes (``'Order'`` or ``'Order AS o'``) to the FROM clause."""
        self._from.extend(flatten(class_names))
        return self

    def _generate_from(self, ctx: QueryContext) -> str:
        if not self._from:
            return ""
        return " FROM " + ", ".join(ctx.add_class(name) for name in self._from)


class JoinClause:
    """``JOIN`` targets with ``ON`` / ``AND`` / ``OR`` conditions and ``USING``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._joins: list[tuple[str, Any, tuple[Any, ...]]] = []

    def join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.JOIN, class_name)

    def inner_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.INNER, class_name)

    def cross_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.CROSS, class_name)

    def straight_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.STRAIGHT, class_name)

    def left_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.LEFT, class_name)

    def left_outer_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.LEFT_OUTER, class_name)

    def right_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.RIGHT, class_name)

    def right_outer_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.RIGHT_OUTER, class_name)

    def natural_left_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.NATURAL_LEFT, class_name)

    def natural_left_outer_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.NATURAL_LEFT_OUTER, class_name)

    def natural_right_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.NATURAL_RIGHT, class_name)

    def natural_right_outer_join(self: _Join, class_name: str) -> _Join:
        return self._add_join(JoinKind.NATURAL_RIGHT_OUTER, class_name)

    def on(self: _Join, condition: str, *args: Any) -> _Join:
        """Add an ``ON`` condition; ``?`` placeholders bind *args* in order."""
        return self._add_condition("ON", condition, args)

    def and_on(self: _Join, condition: str, *args: Any) -> _Join:
        return self._add_condition("AND", condition, args)

    def or_on(self: _Join, condition: str, *args: Any) -> _Join:
        return self._add_condition("OR", condition, args)

    def using(self: _Join, *attributes: str | list[str]) -> _Join:
        """Add ``USING (col, ...)`` to the last join."""
        self._joins.append(("USING", flatten(attributes), ()))
        return self

    def _add_join(self: _Join, kind: JoinKind, class_name: str) -> _Join:
        self._joins.append((kind.value, class_name, ()))
        return self

    def _add_condition(
        self: _Join, keyword: str, condition: str, args: tuple[Any, ...]
    ) -> _Join:
        self._joins.append((keyword, condition, args))
        return self

    def _generate_join(self, ctx: QueryContext) -> str:
        # Register every join target first so conditions see all classes.
        tables = {
            index: ctx.add_class(value)
            for index, (keyword, value, _) in enumerate(self._joins)
            if keyword.endswith("JOIN")
        }
        parts: list[str] = []
        for index, (keyword, value, args) in enumerate(self._joins):
            if index in tables:
                parts.append(f" {keyword} {tables[index]}")
            elif keyword == "USING":
                parts.append(" USING (" + ", ".join(ctx.bare_column(a) for a in value) + ")")
            else:
                parts.append(f" {keyword} {ctx.resolve(value)}")
                ctx.bind(args)
        return "".join(parts)


class WhereClause:
    """``WHERE`` conditions joined with ``AND`` / ``OR``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._where: list[tuple[str, str, tuple[Any, ...]]] = []

    def where(self: _Where, condition: str, *args: Any) -> _Where:
        """Add a condition; joined with ``AND`` when it is not the first one.

        ``?`` placeholders in *condition* bind *args* in order.
        """
        self._where.append(("AND", condition, args))
        return self

    def and_where(self: _Where, condition: str, *args: Any) -> _Where:
        self._where.append(("AND", condition, args))
        return self

    def or_where(self: _Where, condition: str, *args: Any) -> _Where:
        self._where.append(("OR", condition, args))
        return self

    def _generate_where(self, ctx: QueryContext) -> str:
        if not self._where:
            return ""
        parts: list[str] = []
        for connector, condition, args in self._where:
            # The first condition never carries a connector.
            if parts:
                parts.append(f" {connector} ")
            parts.append(ctx.resolve(condition))
            ctx.bind(args)
        return " WHERE " + "".join(parts)


class OrderByClause:
    """``ORDER BY attr ASC|DESC, ...``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._order_by: list[tuple[str, str]] = []

    def order_by_asc(self: _OrderBy, attribute: str) -> _OrderBy:
        self._order_by.append((attribute, "ASC"))
        return self

    def order_by_desc(self: _OrderBy, attribute: str) -> _OrderBy:
        self._order_by.append((attribute, "DESC"))
        return self

    def _generate_order_by(self, ctx: QueryContext) -> str:
        if not self._order_by:
            return ""
        return " ORDER BY " + ", ".join(
            f"{ctx.resolve(attribute)} {direction}" for attribute, direction in self._order_by
        )


class LimitClause:
    """``LIMIT count`` or ``LIMIT offset, count``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._limit: tuple[int, int] | None = None

    def limit(self: _Limit, count: Any, offset: Any = 0) -> _Limit:
        """Limit the rows; both values are coerced to integers."""
        self._limit = (to_int(count), to_int(offset))
        return self

    def _generate_limit(self, ctx: QueryContext) -> str:
        if self._limit is None:
            return ""
        count, offset = self._limit
        if offset == 0:
            return f" LIMIT {count}"
        return f" LIMIT {offset}, {count}"


class SetClause:
    """``SET attr = rule, ...``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._set: list[tuple[str, str, Any]] = []

    def set(self: _Set, attribute: str, value: Any, rule: str = "?") -> _Set:
        """Assign *value* to *attribute*.

        *rule* is the right-hand side, ``?`` by default; ``set('total', 2,
        'total * ?')`` doubles the stored value. *value* is always bound.
        """
        self._set.append((attribute, rule, value))
        return self

    def _generate_set(self, ctx: QueryContext) -> str:
        if not self._set:
            return ""
        parts: list[str] = []
        for attribute, rule, value in self._set:
            parts.append(f"{ctx.column(attribute)} = {ctx.resolve(rule)}")
            ctx.bind([value])
        return " SET " + ", ".join(parts)


class ValuesClause:
    """``VALUES (...), (...)``, one group per ``values`` call."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._values: list[list[tuple[str, Any]]] = []

    def values(self: _Values, *values: Any) -> _Values:
        """Add one row of values.

        Each value is either a scalar, bound to ``?``, or a
        ``(sql_expression, value)`` pair whose expression replaces the
        placeholder (``('UPPER(?)', 'abc')``); the value is bound either way.
        """
        group: list[tuple[str, Any]] = []
        for value in values:
            if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str):
                group.append((value[0], value[1]))
            else:
                group.append(("?", value))
        self._values.append(group)
        return self

    def bound_values(self: _Values, *values: Any) -> _Values:
        """Add one row of values, every one bound to ``?`` as it is."""
        self._values.append([("?", value) for value in values])
        return self

    def _generate_values(self, ctx: QueryContext) -> str:
        if not self._values:
            return ""
        groups: list[str] = []
        for group in self._values:
            groups.append("(" + ", ".join(expression for expression, _ in group) + ")")
            ctx.bind(value for _, value in group)
        return " VALUES " + ", ".join(groups)
