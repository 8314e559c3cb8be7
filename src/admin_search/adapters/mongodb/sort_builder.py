"""MongoDB adapter – sort compilation."""
from __future__ import annotations

from typing import Iterable

from pymongo import ASCENDING, DESCENDING

from admin_search.application.search.fields import FieldConfiguration
from admin_search.application.search.query import resolve_ordering

__all__ = ["SortBuilder"]


class SortBuilder:
    """Compile a sort spec into a pymongo ``[(field, direction)]`` list."""

    def __init__(self, fields: FieldConfiguration) -> None:
        self._sortable = frozenset(fields.sortable_fields or ())
        self._default = fields.default_sort or ()

    def build(self, sort: str | Iterable[str] | None) -> list[tuple[str, int]]:
        return [
            (sort_field.field, DESCENDING if sort_field.descending else ASCENDING)
            for sort_field in resolve_ordering(sort, self._sortable, self._default)
        ]
