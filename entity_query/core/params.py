"""SQL placeholder normalization.

Statements are generated with qmark (``?``) placeholders. Drivers using the
``format`` paramstyle (``%s``) get them rewritten, leaving string literals
and quoted identifiers untouched.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from entity_query.core.tokens import split_literals


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert ``?`` placeholders to the target param style.

    Args:
        sql: SQL string with ``?`` placeholders.
        paramstyle: Target style - 'qmark' (no conversion) or 'format' (%s).

    Returns:
        SQL with placeholders converted to the target style.
    """
    if paramstyle == "qmark":
        return sql
    return _convert_to_format(sql)


@lru_cache(maxsize=256)
def _convert_to_format(sql: str) -> str:
    """Convert ``?`` placeholders to ``%s``, preserving literals."""
    parts: list[str] = []
    for kind, content in split_literals(sql):
        if kind == "code":
            parts.append(content.replace("?", "%s"))
        else:
            parts.append(content)
    return "".join(parts)


def coerce_params(params: Any) -> tuple[Any, ...]:
    """Normalize *params* to a tuple for positional binding.

    * ``None`` -> empty tuple.
    * ``tuple`` / ``list`` -> ``tuple``.
    * Any other scalar -> wrapped in a single-element tuple.
    """
    if params is None:
        return ()
    if isinstance(params, (tuple, list)):
        return tuple(params)
    return (params,)
