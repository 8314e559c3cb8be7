"""Infrastructure errors – search backend and index failures."""

from __future__ import annotations

from typing import Any

from admin_search.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class BackendUnavailableError(InfrastructureError):
    """A search backend could not be reached while executing a query.

    This is the only failure the search path lets reach the caller.
    """

    default_code = "backend_unavailable"
    retryable = True

    def __init__(
        self,
        backend: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"backend": backend})
        super().__init__(message or f"Search backend '{backend}' is unavailable", **kwargs)
        self.backend = backend


class IndexPopulationError(InfrastructureError):
    """Bulk population of a search index failed.

    Raised and handled inside :class:`~admin_search.adapters.elasticsearch.IndexManager`;
    it never escapes the lifecycle manager.
    """

    default_code = "index_population_failed"

    def __init__(
        self,
        index: str,
        message: str | None = None,
        *,
        failed: int = 0,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"index": index, "failed": failed})
        super().__init__(message or f"Could not populate index '{index}'", **kwargs)
        self.index = index
        self.failed = failed


__all__ = ["BackendUnavailableError", "IndexPopulationError", "InfrastructureError"]
