"""MongoDB adapter – free-text query compilation."""
from __future__ import annotations

import re
from typing import Any, Sequence

from admin_search.application.search.query import WILDCARD_QUERY, is_blank

__all__ = ["QueryBuilder"]


class QueryBuilder:
    """Compile a free-text query into a ``$text`` or regex predicate.

    Entities with a text index get ``$text``; the others fall back to a
    case-insensitive substring match on each searchable field, so a query
    also matches inside words.  The term is always escaped.
    """

    def __init__(self, searchable_fields: Sequence[str], text_indexed_fields: Sequence[str] = ()) -> None:
        self._fields = list(searchable_fields)
        self._text_indexed = bool(text_indexed_fields)

    def build(self, query: str | None) -> dict[str, Any] | None:
        if is_blank(query):
            return None
        text = str(query).strip()
        if text == WILDCARD_QUERY:
            return None
        if self._text_indexed:
            return {"$text": {"$search": text}}
        if not self._fields:
            return None
        pattern = re.escape(text)
        return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in self._fields]}
