"""Elasticsearch adapter – filter compilation.

Fields are not checked against ``filterable_fields`` here: the index mapping
is ``dynamic: false``, so a filter on an unmapped field matches nothing
rather than failing.
"""
from __future__ import annotations

from typing import Any, Collection, Mapping

from admin_search.application.search.query import FieldFilter, FilterKind, classify_filters

__all__ = ["FilterBuilder", "render_clause"]


def _lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def render_clause(clause: FieldFilter) -> dict[str, Any]:
    if clause.kind is FilterKind.EXISTS:
        return {"exists": {"field": clause.field}}
    if clause.kind is FilterKind.MEMBERSHIP:
        return {"terms": {clause.field: [_lower(item) for item in clause.value]}}
    if clause.kind is FilterKind.RANGE:
        return {"range": {clause.field: dict(clause.value)}}
    if clause.kind is FilterKind.BOOLEAN:
        return {"term": {clause.field: bool(clause.value)}}
    return {"term": {clause.field: _lower(clause.value)}}


class FilterBuilder:
    """Compile a field→value map into Elasticsearch filter clauses."""

    def __init__(self, boolean_fields: Collection[str] = ()) -> None:
        self._boolean_fields = frozenset(boolean_fields)

    def clauses(self, filters: Mapping[str, Any] | None) -> list[dict[str, Any]]:
        return [render_clause(clause) for clause in classify_filters(filters, self._boolean_fields)]

    def build(self, filters: Mapping[str, Any] | None) -> dict[str, Any] | None:
        """One clause as-is, several wrapped in ``bool.filter``, none as ``None``."""
        clauses = self.clauses(filters)
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return {"bool": {"filter": clauses}}
