"""Elasticsearch adapter – IndexSearchStrategy."""
from __future__ import annotations

from typing import Any, Mapping

from elasticsearch import ApiError, NotFoundError, TransportError

from admin_search.adapters.elasticsearch.filter_builder import FilterBuilder
from admin_search.adapters.elasticsearch.index_manager import IndexManager
from admin_search.adapters.elasticsearch.query_builder import QueryBuilder
from admin_search.adapters.elasticsearch.sort_builder import SortBuilder
from admin_search.application.pagination import PaginatedResultSet
from admin_search.application.search.entities import INDEX
from admin_search.application.search.fields import FieldConfiguration
from admin_search.application.search.query import SearchRequest
from admin_search.application.search.record import SearchRecord
from admin_search.kernel.errors import BackendUnavailableError
from admin_search.observability.logging import get_logger

__all__ = ["IndexSearchStrategy", "combine"]

logger = get_logger(__name__)

INDEX_NOT_FOUND = "index_not_found_exception"
MAX_RESULT_WINDOW = 10000
MATCH_ALL: dict[str, Any] = {"match_all": {}}


def combine(query: dict[str, Any] | None, filters: list[dict[str, Any]]) -> dict[str, Any]:
    """AND *query* with *filters*; match everything when both are empty."""
    if query is not None and filters:
        return {"bool": {"must": [query], "filter": filters}}
    if query is not None:
        return query
    if len(filters) == 1:
        return {"bool": {"filter": filters[0]}}
    if filters:
        return {"bool": {"filter": filters}}
    return dict(MATCH_ALL)


def _total(hits: Mapping[str, Any]) -> int:
    total = hits.get("total", 0)
    if isinstance(total, Mapping):
        return int(total.get("value", 0))
    return int(total or 0)


class IndexSearchStrategy:
    """Search one entity's Elasticsearch index.

    With a *manager*, :meth:`prepare` creates and populates the index on
    first use.  Filters are not restricted to ``filterable_fields``.  Pages
    reaching past *max_result_window* (the index setting of the same name)
    come back empty with the real total; a missing index reads as no hits.
    """

    backend = INDEX

    def __init__(
        self,
        entity: str,
        client: Any,
        index: str,
        fields: FieldConfiguration,
        manager: IndexManager | None = None,
        *,
        max_result_window: int = MAX_RESULT_WINDOW,
    ) -> None:
        self.entity = entity
        self._client = client
        self._index = index
        self._fields = fields
        self._manager = manager
        self._max_result_window = max_result_window
        self._queries = QueryBuilder(fields.searchable_fields or ())
        self._filters = FilterBuilder(fields.boolean_fields or ())
        self._sorts = SortBuilder(fields)

    @property
    def fields(self) -> FieldConfiguration:
        return self._fields

    @property
    def index(self) -> str:
        return self._index

    @property
    def manager(self) -> IndexManager | None:
        return self._manager

    def prepare(self) -> None:
        if self._manager is not None:
            self._manager.ensure_ready()

    def compile_query(self, query: str | None) -> dict[str, Any] | None:
        return self._queries.build(query)

    def compile_filter(self, filters: Mapping[str, Any] | None) -> dict[str, Any] | None:
        return self._filters.build(filters)

    def compile_predicate(self, request: SearchRequest, scope: Any = None) -> dict[str, Any]:
        clauses = self._filters.clauses(request.filter)
        if scope:
            clauses.append(dict(scope))
        return combine(self.compile_query(request.query), clauses)

    def compile_ordering(self, sort: Any) -> list[dict[str, Any]]:
        return self._sorts.build(sort)

    def source_fields(self) -> list[str]:
        """Fields to return with each hit; ``_``-prefixed pseudo-fields excluded."""
        names: list[str] = []
        for group in (
            self._fields.searchable_fields,
            self._fields.sortable_fields,
            self._fields.essential_fields,
        ):
            for name in group or ():
                if not name.startswith("_") and name not in names:
                    names.append(name)
        return names

    def fetch(
        self,
        predicate: dict[str, Any],
        ordering: list[Any],
        request: SearchRequest,
    ) -> PaginatedResultSet[SearchRecord]:
        paging = request.page_request
        beyond_window = paging.offset + paging.per_page > self._max_result_window
        try:
            if beyond_window:
                # the cluster rejects from + size past the window; count only
                response = self._client.search(index=self._index, query=predicate, size=0, track_total_hits=True)
            else:
                response = self._client.search(
                    index=self._index,
                    query=predicate,
                    sort=ordering,
                    from_=paging.offset,
                    size=paging.per_page,
                    source=self.source_fields(),
                    track_total_hits=True,
                )
        except TransportError as exc:
            raise BackendUnavailableError(INDEX, cause=exc) from exc
        except NotFoundError as exc:
            if exc.error != INDEX_NOT_FOUND:
                raise
            logger.warning("index_missing_at_search", entity=self.entity, index=self._index)
            return PaginatedResultSet.of([], paging, 0)
        except ApiError as exc:
            if exc.status_code < 500:
                raise
            raise BackendUnavailableError(INDEX, cause=exc) from exc
        hits = response["hits"]
        if beyond_window:
            logger.debug("page_beyond_result_window", index=self._index, offset=paging.offset)
            return PaginatedResultSet.of([], paging, _total(hits))
        records = [SearchRecord.from_hit(hit) for hit in hits.get("hits", [])]
        return PaginatedResultSet.of(records, paging, _total(hits))
