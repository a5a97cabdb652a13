"""Enumerations shared across the package."""

from __future__ import annotations

from enum import Enum


class ResolverStrategy(str, Enum):
    """Metadata resolution strategies."""

    LIVE = "live"
    DECLARATIVE = "declarative"


class JoinKind(str, Enum):
    """SQL join operators, by keyword."""

    JOIN = "JOIN"
    INNER = "INNER JOIN"
    CROSS = "CROSS JOIN"
    STRAIGHT = "STRAIGHT_JOIN"
    LEFT = "LEFT JOIN"
    LEFT_OUTER = "LEFT OUTER JOIN"
    RIGHT = "RIGHT JOIN"
    RIGHT_OUTER = "RIGHT OUTER JOIN"
    NATURAL_LEFT = "NATURAL LEFT JOIN"
    NATURAL_LEFT_OUTER = "NATURAL LEFT OUTER JOIN"
    NATURAL_RIGHT = "NATURAL RIGHT JOIN"
    NATURAL_RIGHT_OUTER = "NATURAL RIGHT OUTER JOIN"
