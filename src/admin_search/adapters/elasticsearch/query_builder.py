"""Elasticsearch adapter – free-text query compilation."""
from __future__ import annotations

from typing import Any, Sequence

from admin_search.application.search.query import WILDCARD_QUERY, is_blank

__all__ = ["QueryBuilder"]


class QueryBuilder:
    """Compile a free-text query into a ``multi_match`` over searchable fields.

    ``None`` means "match everything" and is returned for a blank query, the
    ``"*"`` wildcard, or an entity without searchable fields.
    """

    def __init__(self, searchable_fields: Sequence[str]) -> None:
        self._fields = list(searchable_fields)

    def build(self, query: str | None) -> dict[str, Any] | None:
        if is_blank(query):
            return None
        text = str(query).strip()
        if text == WILDCARD_QUERY or not self._fields:
            return None
        return {
            "multi_match": {
                "query": text,
                "fields": list(self._fields),
                "type": "best_fields",
                "fuzziness": "AUTO",
                "minimum_should_match": "75%",
            }
        }
