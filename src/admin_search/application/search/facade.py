"""Application search – SearchFacade, the single search entry point."""
from __future__ import annotations

import time
from typing import Any, Mapping

from admin_search.application.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, PaginatedResultSet
from admin_search.application.search.query import SearchRequest
from admin_search.application.search.record import SearchRecord
from admin_search.application.search.strategy import SearchStrategy
from admin_search.observability.logging import get_logger

__all__ = ["SearchFacade"]

logger = get_logger(__name__)


class SearchFacade:
    """Run a search for one entity on whichever backend its strategy wraps.

    Usage::

        facade = SearchFacade(StoreSearchStrategy("banks", db.banks, fields))
        page = facade.execute({"query": "mandiri", "sort": "name:asc", "page": 2})
        page.to_meta()

    *scope* is an optional, already-compiled backend predicate supplied by
    the caller (for example an authorization scope).  It is AND-combined
    with the compiled query and filter and is never inspected.
    """

    def __init__(
        self,
        strategy: SearchStrategy,
        *,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
    ) -> None:
        self._strategy = strategy
        self._default_per_page = default_per_page
        self._max_per_page = max_per_page

    @property
    def strategy(self) -> SearchStrategy:
        return self._strategy

    def normalize(self, params: Mapping[str, Any] | SearchRequest | None) -> SearchRequest:
        return SearchRequest.from_params(
            params,
            default_per_page=self._default_per_page,
            max_per_page=self._max_per_page,
        )

    def execute(
        self,
        params: Mapping[str, Any] | SearchRequest | None = None,
        scope: Any = None,
    ) -> PaginatedResultSet[SearchRecord]:
        t0 = time.monotonic()
        request = self.normalize(params)
        self._strategy.prepare()
        predicate = self._strategy.compile_predicate(request, scope)
        ordering = self._strategy.compile_ordering(request.sort)
        result = self._strategy.fetch(predicate, ordering, request)
        logger.debug(
            "search_executed",
            entity=self._strategy.entity,
            backend=self._strategy.backend,
            page=request.page,
            per_page=request.per_page,
            total_count=result.total_count,
            took_ms=int((time.monotonic() - t0) * 1000),
        )
        return result
