"""Clause and statement builders."""

from entity_query.query.context import QueryContext, split_alias
from entity_query.query.delete import DeleteStatement
from entity_query.query.insert import InsertStatement
from entity_query.query.select import SelectStatement
from entity_query.query.update import UpdateStatement

__all__ = [
    "DeleteStatement",
    "InsertStatement",
    "QueryContext",
    "SelectStatement",
    "UpdateStatement",
    "split_alias",
]
