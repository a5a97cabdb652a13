"""Repository layer - DDD repository pattern."""

from __future__ import annotations

from entity_query.repository.base import Repository

__all__ = [
    "Repository",
]
