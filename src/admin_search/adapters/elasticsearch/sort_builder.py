"""Elasticsearch adapter – sort compilation."""
from __future__ import annotations

from typing import Any, Iterable

from admin_search.application.search.entities import ID_FIELD
from admin_search.application.search.fields import FieldConfiguration
from admin_search.application.search.query import SortField, resolve_ordering

__all__ = ["PSEUDO_FIELDS", "SortBuilder"]

PSEUDO_FIELDS: frozenset[str] = frozenset({"_score", "_id"})


class SortBuilder:
    """Compile a sort spec into Elasticsearch sort clauses.

    Text fields listed in ``keyword_fields`` sort on their ``.keyword``
    sibling; documents missing the sort field always sort last.  ``_id``
    sorts on the indexed ``id`` keyword copy.
    """

    def __init__(self, fields: FieldConfiguration) -> None:
        self._sortable = frozenset(fields.sortable_fields or ())
        self._keyword = frozenset(fields.keyword_fields or ())
        self._default = fields.default_sort or ()

    def render(self, sort_field: SortField) -> dict[str, Any]:
        order = sort_field.direction.value
        name = sort_field.field
        if name == "_id":
            return {ID_FIELD: {"order": order, "missing": "_last", "unmapped_type": "keyword"}}
        if name in PSEUDO_FIELDS:
            return {name: {"order": order}}
        if name in self._keyword:
            return {f"{name}.keyword": {"order": order, "missing": "_last", "unmapped_type": "keyword"}}
        return {name: {"order": order, "missing": "_last"}}

    def build(self, sort: str | Iterable[str] | None) -> list[dict[str, Any]]:
        return [self.render(field) for field in resolve_ordering(sort, self._sortable, self._default)]
