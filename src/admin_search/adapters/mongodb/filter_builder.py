"""MongoDB adapter – filter compilation.

Only fields listed in ``filterable_fields`` reach the store; everything else
is dropped before classification.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Collection, Mapping

from admin_search.application.search.query import FieldFilter, FilterKind, classify_filters

__all__ = ["FilterBuilder", "parse_bound"]

_ISO_DATE_LENGTH = 10
_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def parse_bound(value: Any) -> Any:
    """Range bound as a :class:`datetime` when it reads as an ISO date.

    ``"2024-01-31T10:00:00"`` keeps its time; anything whose first ten
    characters are ``YYYY-MM-DD`` becomes midnight of that day; other
    values pass through unchanged.
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not _ISO_DATE_PREFIX.match(text):
        return value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text[:_ISO_DATE_LENGTH], "%Y-%m-%d")
    except ValueError:
        return value


def render_clause(clause: FieldFilter) -> dict[str, Any]:
    if clause.kind is FilterKind.EXISTS:
        return {clause.field: {"$exists": True}}
    if clause.kind is FilterKind.MEMBERSHIP:
        return {clause.field: {"$in": list(clause.value)}}
    if clause.kind is FilterKind.RANGE:
        return {clause.field: {f"${op}": parse_bound(bound) for op, bound in clause.value.items()}}
    if clause.kind is FilterKind.BOOLEAN:
        return {clause.field: bool(clause.value)}
    return {clause.field: clause.value}


class FilterBuilder:
    def __init__(self, boolean_fields: Collection[str] = (), filterable_fields: Collection[str] = ()) -> None:
        self._boolean_fields = frozenset(boolean_fields)
        self._filterable_fields = frozenset(filterable_fields)

    def clauses(self, filters: Mapping[str, Any] | None) -> list[dict[str, Any]]:
        classified = classify_filters(filters, self._boolean_fields, self._filterable_fields)
        return [render_clause(clause) for clause in classified]

    def build(self, filters: Mapping[str, Any] | None) -> dict[str, Any] | None:
        clauses = self.clauses(filters)
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return {"$and": clauses}
