"""MongoDB adapter – StoreSearchStrategy."""
from __future__ import annotations

from typing import Any, Mapping

from pymongo import TEXT
from pymongo.errors import ConnectionFailure

from admin_search.adapters.mongodb.filter_builder import FilterBuilder
from admin_search.adapters.mongodb.query_builder import QueryBuilder
from admin_search.adapters.mongodb.sort_builder import SortBuilder
from admin_search.application.pagination import PaginatedResultSet
from admin_search.application.search.entities import STORE
from admin_search.application.search.fields import FieldConfiguration
from admin_search.application.search.query import SearchRequest
from admin_search.application.search.record import SearchRecord
from admin_search.kernel.errors import BackendUnavailableError
from admin_search.observability.logging import get_logger

__all__ = ["StoreSearchStrategy", "combine"]

logger = get_logger(__name__)


def combine(*parts: dict[str, Any] | None) -> dict[str, Any]:
    """AND the non-empty *parts*; ``{}`` matches every document."""
    present = [part for part in parts if part]
    if not present:
        return {}
    if len(present) == 1:
        return present[0]
    return {"$and": present}


class StoreSearchStrategy:
    """Search one MongoDB collection directly.

    Filters on fields outside ``filterable_fields`` are dropped.  The text
    index that ``$text`` queries need is created by :meth:`prepare` on first
    use for entities that declare ``text_indexed_fields``; until it exists,
    queries fall back to case-insensitive regex matching.
    """

    backend = STORE

    def __init__(self, entity: str, collection: Any, fields: FieldConfiguration) -> None:
        self.entity = entity
        self._col = collection
        self._fields = fields
        self._queries = QueryBuilder(fields.searchable_fields or (), fields.text_indexed_fields or ())
        self._regex_queries = QueryBuilder(fields.searchable_fields or ())
        self._filters = FilterBuilder(fields.boolean_fields or (), fields.filterable_fields or ())
        self._sorts = SortBuilder(fields)
        self._indexes_ready = False

    @property
    def fields(self) -> FieldConfiguration:
        return self._fields

    @property
    def collection(self) -> Any:
        return self._col

    def create_indexes(self) -> str | None:
        """Create the text index over ``text_indexed_fields``.

        Idempotent; returns the index name, or ``None`` when the entity has
        no text-indexed fields.
        """
        fields = self._fields.text_indexed_fields or ()
        if not fields:
            self._indexes_ready = True
            return None
        name = self._col.create_index([(field, TEXT) for field in fields], name=f"{self.entity}_text")
        self._indexes_ready = True
        logger.info("text_index_ready", entity=self.entity, index=name)
        return name

    def prepare(self) -> None:
        """Create the text index once; a failure is logged and retried on the next call."""
        if self._indexes_ready:
            return
        try:
            self.create_indexes()
        except Exception as exc:  # noqa: BLE001
            logger.warning("text_index_create_failed", entity=self.entity, error=str(exc))

    def compile_query(self, query: str | None) -> dict[str, Any] | None:
        # $text needs the text index; match by regex until it exists
        if not self._indexes_ready and self._fields.text_indexed_fields:
            return self._regex_queries.build(query)
        return self._queries.build(query)

    def compile_filter(self, filters: Mapping[str, Any] | None) -> dict[str, Any] | None:
        return self._filters.build(filters)

    def compile_predicate(self, request: SearchRequest, scope: Any = None) -> dict[str, Any]:
        return combine(
            self.compile_query(request.query),
            *self._filters.clauses(request.filter),
            dict(scope) if scope else None,
        )

    def compile_ordering(self, sort: Any) -> list[tuple[str, int]]:
        return self._sorts.build(sort)

    def fetch(
        self,
        predicate: dict[str, Any],
        ordering: list[Any],
        request: SearchRequest,
    ) -> PaginatedResultSet[SearchRecord]:
        paging = request.page_request
        try:
            total = self._col.count_documents(predicate)
            cursor = self._col.find(predicate).sort(ordering).skip(paging.offset).limit(paging.per_page)
            records = [SearchRecord.from_document(document) for document in cursor]
        except ConnectionFailure as exc:
            raise BackendUnavailableError(STORE, cause=exc) from exc
        return PaginatedResultSet.of(records, paging, total)
