"""SQL fragment tokenizer.

Splits caller-supplied SQL fragments into literal and code segments, and
rewrites identifier tokens found in code segments. Attribute-to-column
resolution is done token by token so that one attribute name can never
match inside another.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from entity_query.core.exceptions import StatementSyntaxError

# Bare or dotted identifier, not preceded by a word character or a dot
# (so numbers such as 1e5 and the tail of a.b.c are never matched).
_IDENTIFIER = re.compile(r"(?<![\w.])([A-Za-z_]\w*(?:\.(?:[A-Za-z_]\w*|\*))?)")

_QUOTES = {"'": "string", '"': "identifier", "`": "identifier"}


def _scan_quoted(sql: str, start: int) -> int:
    """Return the index just past the quoted token opening at *start*.

    A doubled quote character inside the token is an escape.

    Raises:
        StatementSyntaxError: If the token is never closed.
    """
    quote = sql[start]
    n = len(sql)
    j = start + 1
    while j < n:
        if sql[j] == quote:
            j += 1
            if j >= n or sql[j] != quote:
                return j
            j += 1  # doubled quote, continue
        else:
            j += 1
    raise StatementSyntaxError(f"Unterminated {_QUOTES[quote]} in SQL fragment: {sql}")


def split_literals(sql: str) -> list[tuple[str, str]]:
    """Split *sql* into ``('string', …)``, ``('identifier', …)`` and ``('code', …)`` tokens.

    Single-quoted string literals, double-quoted and backtick-quoted
    identifiers are preserved as-is. Everything else is a ``'code'`` token.

    Raises:
        StatementSyntaxError: If a literal or quoted identifier is unterminated.
    """
    tokens: list[tuple[str, str]] = []
    i = 0
    n = len(sql)
    last = 0

    while i < n:
        if sql[i] in _QUOTES:
            if i > last:
                tokens.append(("code", sql[last:i]))
            j = _scan_quoted(sql, i)
            tokens.append((_QUOTES[sql[i]], sql[i:j]))
            last = j
            i = j
        else:
            i += 1

    if last < n:
        tokens.append(("code", sql[last:]))

    return tokens


def substitute_identifiers(sql: str, resolve: Callable[[str], str | None]) -> str:
    """Rewrite identifier tokens of *sql* through *resolve*.

    *resolve* receives each bare (``total``) or dotted (``Order.total``)
    identifier and returns its replacement, or ``None`` to leave it as is.
    Literals and quoted identifiers are never rewritten.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        replacement = resolve(token)
        return token if replacement is None else replacement

    parts: list[str] = []
    for kind, content in split_literals(sql):
        if kind == "code":
            parts.append(_IDENTIFIER.sub(_replace, content))
        else:
            parts.append(content)
    return "".join(parts)
