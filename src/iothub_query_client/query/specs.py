"""Query specifications accepted by query collections."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class SqlQuery:
    """SELECT/FROM style query text, sent as the JSON request body."""

    text: str


@dataclass(slots=True, frozen=True)
class TypedQuery:
    """Typed listing driven only by continuation headers; no request body."""


QuerySpec = SqlQuery | TypedQuery


__all__ = [
    "SqlQuery",
    "TypedQuery",
    "QuerySpec",
]
