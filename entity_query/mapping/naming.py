"""Naming conventions between entity names and storage names.

    table ``user_account``               <-> entity ``UserAccount``
    column ``user_account_first_name``   <-> attribute ``firstName``
"""

from __future__ import annotations

import re

# Boundary between a lowercase letter/digit and an uppercase letter
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _capitalize(segment: str) -> str:
    return segment[:1].upper() + segment[1:]


def snake_case(name: str) -> str:
    """``OrderLine`` -> ``order_line``, ``customerId`` -> ``customer_id``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def entity_name_for_table(table_name: str) -> str:
    """``user_account`` -> ``UserAccount``."""
    return "".join(_capitalize(part) for part in table_name.split("_") if part)


def table_name_for_entity(entity_name: str) -> str:
    """``UserAccount`` -> ``user_account``."""
    return snake_case(entity_name)


def attribute_name_for_column(column_name: str, table_name: str) -> str:
    """Strip the table prefix from *column_name* and camel-case the rest.

    ``user_account_first_name`` in ``user_account`` -> ``firstName``.
    Columns without the prefix are camel-cased whole.
    """
    prefix = table_name.lower() + "_"
    remainder = column_name
    if column_name.lower().startswith(prefix) and len(column_name) > len(prefix):
        remainder = column_name[len(prefix) :]
    camel = "".join(_capitalize(part) for part in remainder.split("_") if part)
    return camel[:1].lower() + camel[1:]


def column_name_for_attribute(attribute_name: str, table_name: str) -> str:
    """``firstName`` in ``user_account`` -> ``user_account_first_name``."""
    return f"{table_name}_{snake_case(attribute_name)}"
