"""Per-statement resolution state.

A QueryContext is created for every generation of a statement. It records
the classes the statement references (FROM, JOIN, UPDATE and INSERT
targets), rewrites attribute names to column names in SQL fragments, and
collects bound arguments in SQL order.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from entity_query.core.exceptions import AmbiguousAttributeError, MappingError
from entity_query.core.tokens import substitute_identifiers
from entity_query.mapping.entity import EntityMapping
from entity_query.mapping.resolver import MetadataResolver

_AS = re.compile(r"\s+AS\s+", re.IGNORECASE)


def split_alias(text: str) -> tuple[str, str | None]:
    """Split ``expr AS alias`` on the last top-level ``AS``.

    ``AS`` inside parentheses (``CAST(x AS CHAR)``) is not an alias.
    """
    for match in reversed(list(_AS.finditer(text))):
        head = text[: match.start()]
        if head.count("(") == head.count(")"):
            alias = text[match.end() :].strip().strip('"`')
            return head.strip(), alias
    return text.strip(), None


@dataclass(frozen=True)
class ResolvedClass:
    """A class referenced by a statement.

    Attributes:
        qualifier: Name used to qualify its attributes (alias or class name).
        reference: Name used to qualify its columns (alias or table name).
        mapping: The resolved entity mapping.
    """

    qualifier: str
    reference: str
    mapping: EntityMapping


class QueryContext:
    """Attribute resolution and argument collection for one statement.

    Args:
        resolver: Metadata resolver used to look up referenced classes.
    """

    def __init__(self, resolver: MetadataResolver) -> None:
        self._resolver = resolver
        self.arguments: list[Any] = []
        self.classes: dict[str, ResolvedClass] = {}
        self._columns: dict[str, str] = {}
        self._ambiguous: dict[str, list[str]] = {}

    def add_class(self, class_ref: str) -> str:
        """Register ``Class`` or ``Class AS alias`` and return its table reference.

        Raises:
            MappingError: If the class cannot be resolved.
        """
        class_name, alias = split_alias(class_ref)
        mapping = self._resolver.resolve(class_name)
        qualifier = alias or class_name
        reference = alias or mapping.table_name
        self.classes[qualifier] = ResolvedClass(qualifier, reference, mapping)
        self._rebuild()
        if alias:
            return f"{mapping.table_name} AS {alias}"
        return mapping.table_name

    def bind(self, args: Iterable[Any]) -> None:
        self.arguments.extend(args)

    @property
    def attribute_to_column(self) -> dict[str, str]:
        """Flattened attribute -> column map (qualified and unambiguous bare keys)."""
        return dict(self._columns)

    def lookup(self, name: str) -> str | None:
        """Column for a bare or qualified attribute name, or ``None``.

        Raises:
            AmbiguousAttributeError: If a bare name belongs to several classes.
        """
        column = self._columns.get(name)
        if column is None and name in self._ambiguous:
            raise AmbiguousAttributeError(name, self._ambiguous[name])
        return column

    def column(self, name: str) -> str:
        """Like lookup, but unknown attributes raise MappingError."""
        column = self.lookup(name)
        if column is None:
            raise MappingError(f"Unknown attribute '{name}' for {sorted(self.classes)}")
        return column

    def bare_column(self, name: str) -> str:
        """Unqualified column for *name*, as required by ``USING (...)``."""
        columns = {
            rc.mapping.attribute_to_column[name]
            for rc in self.classes.values()
            if rc.mapping.has_attribute(name)
        }
        if len(columns) > 1:
            raise AmbiguousAttributeError(name, sorted(self.classes))
        return columns.pop() if columns else name

    def resolve(self, fragment: str) -> str:
        """Rewrite every attribute token of *fragment* to its column."""
        return substitute_identifiers(fragment, self.lookup)

    def select_item(self, item: str) -> str:
        """Render one select-list entry.

        Aliased expressions and mapped attributes are labelled with
        ``AS "<name>"`` so that rows come back keyed by attribute name.
        """
        expr, alias = split_alias(item)
        if alias is not None:
            return f'{self.resolve(expr)} AS "{alias}"'
        if expr == "*":
            return self.expand_star()
        if expr.endswith(".*") and expr[:-2] in self.classes:
            return self.expand_star(expr[:-2])
        column = self.lookup(expr)
        if column is not None:
            return f'{column} AS "{expr}"'
        return self.resolve(expr)

    def expand_star(self, qualifier: str | None = None) -> str:
        """Explicit column list for ``*`` (or ``Qualifier.*``).

        With one class, columns are labelled by bare attribute; with more,
        by ``Qualifier.attribute``.
        """
        if not self.classes:
            return "*"
        targets = [self.classes[qualifier]] if qualifier else list(self.classes.values())
        several = len(self.classes) > 1
        parts: list[str] = []
        for rc in targets:
            for attribute, column in rc.mapping.attribute_to_column.items():
                if several:
                    parts.append(f'{rc.reference}.{column} AS "{rc.qualifier}.{attribute}"')
                else:
                    parts.append(f'{column} AS "{attribute}"')
        return ", ".join(parts)

    def _rebuild(self) -> None:
        columns: dict[str, str] = {}
        owners: dict[str, list[ResolvedClass]] = {}
        several = len(self.classes) > 1

        for rc in self.classes.values():
            for attribute, column in rc.mapping.attribute_to_column.items():
                columns[f"{rc.qualifier}.{attribute}"] = f"{rc.reference}.{column}"
                owners.setdefault(attribute, []).append(rc)

        self._ambiguous = {}
        for attribute, classes in owners.items():
            if len(classes) > 1:
                self._ambiguous[attribute] = [rc.qualifier for rc in classes]
                continue
            rc = classes[0]
            column = rc.mapping.attribute_to_column[attribute]
            columns[attribute] = f"{rc.reference}.{column}" if several else column

        self._columns = columns
