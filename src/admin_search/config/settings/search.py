"""Config settings – SearchSettings for both search backends."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from admin_search.config.settings.base import Settings
from admin_search.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class SearchSettings(Settings):
    """Connection and paging settings, read from ``SEARCH_*`` variables.

    ``elasticsearch_enabled`` switches index-backed entities over to the
    store backend when the cluster is not provisioned.
    """

    _prefix: ClassVar[str] = "SEARCH"
    _secret_fields: ClassVar[frozenset[str]] = frozenset({"elasticsearch_password", "mongodb_uri"})

    elasticsearch_url: str = "http://localhost:9200"
    elasticsearch_username: str | None = None
    elasticsearch_password: str | None = None
    elasticsearch_ca_file: str | None = None
    elasticsearch_enabled: bool = True
    request_timeout: float = 10.0

    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "admin_api"
    mongodb_timeout_ms: int = 5000

    index_prefix: str = ""
    default_per_page: int = 10
    max_per_page: int = 100
    bulk_chunk_size: int = 500
    sync_max_attempts: int = 5
    max_result_window: int = 10000

    def _validate(self) -> None:
        if self.max_per_page < 1:
            raise InvalidSettingValueError("max_per_page", self.max_per_page, "must be >= 1")
        if not 1 <= self.default_per_page <= self.max_per_page:
            raise InvalidSettingValueError(
                "default_per_page",
                self.default_per_page,
                f"must be between 1 and max_per_page ({self.max_per_page})",
            )
        if self.bulk_chunk_size < 1:
            raise InvalidSettingValueError("bulk_chunk_size", self.bulk_chunk_size, "must be >= 1")
        if self.sync_max_attempts < 1:
            raise InvalidSettingValueError("sync_max_attempts", self.sync_max_attempts, "must be >= 1")
        if self.request_timeout <= 0:
            raise InvalidSettingValueError("request_timeout", self.request_timeout, "must be > 0")
        if self.max_result_window < self.max_per_page:
            raise InvalidSettingValueError(
                "max_result_window",
                self.max_result_window,
                f"must be >= max_per_page ({self.max_per_page})",
            )

    def index_name(self, entity: str) -> str:
        """Return the Elasticsearch index name for *entity*."""
        return f"{self.index_prefix}{entity}"


__all__ = ["SearchSettings"]
