"""Application search – SearchStrategy port."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from admin_search.application.pagination import PaginatedResultSet
from admin_search.application.search.fields import FieldConfiguration
from admin_search.application.search.query import SearchRequest
from admin_search.application.search.record import SearchRecord

__all__ = ["SearchStrategy"]


@runtime_checkable
class SearchStrategy(Protocol):
    """One search backend for one entity.

    ``compile_predicate`` and ``compile_ordering`` never raise on malformed
    input; ``fetch`` may raise
    :class:`~admin_search.kernel.errors.BackendUnavailableError`.
    """

    entity: str
    backend: str

    @property
    def fields(self) -> FieldConfiguration: ...

    def prepare(self) -> None:
        """Make the backend ready to answer queries (never raises)."""
        ...

    def compile_query(self, query: str | None) -> dict[str, Any] | None: ...

    def compile_filter(self, filters: dict[str, Any] | None) -> dict[str, Any] | None: ...

    def compile_predicate(self, request: SearchRequest, scope: Any = None) -> dict[str, Any]: ...

    def compile_ordering(self, sort: Any) -> list[Any]: ...

    def fetch(
        self,
        predicate: dict[str, Any],
        ordering: list[Any],
        request: SearchRequest,
    ) -> PaginatedResultSet[SearchRecord]: ...
