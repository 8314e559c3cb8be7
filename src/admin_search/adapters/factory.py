"""Adapters – SearchFacadeFactory: wire a facade to an entity's backend."""
from __future__ import annotations

from typing import Any

from admin_search.adapters.elasticsearch import DocumentSynchronizer, IndexManager, IndexSearchStrategy
from admin_search.adapters.mongodb import MongoRecordSource, StoreSearchStrategy
from admin_search.application.search import SearchFacade, SearchStrategy
from admin_search.application.search.entities import (
    COLLECTIONS,
    DEFAULT_BACKENDS,
    INDEX,
    STORE,
    index_registry,
    mapping_for,
    store_registry,
)
from admin_search.application.search.fields import ConfigurationRegistry
from admin_search.config.settings.search import SearchSettings
from admin_search.kernel.errors import ApplicationError, UnknownEntityError
from admin_search.observability.logging import get_logger

__all__ = ["SearchFacadeFactory"]

logger = get_logger(__name__)


class SearchFacadeFactory:
    """Build :class:`SearchFacade` instances for the admin API's entities.

    Any non-blank entity name is accepted: entities missing from the catalog
    search the collection of the same name with default field settings.
    With ``settings.elasticsearch_enabled`` off, every entity is served by
    the store backend.

    Usage::

        settings = SettingsFactory.create(SearchSettings)
        factory = SearchFacadeFactory(
            settings,
            build_elasticsearch_client(settings),
            build_mongo_database(settings),
        )
        page = factory.for_entity("events").execute({"query": "jakarta"})
    """

    def __init__(
        self,
        settings: SearchSettings,
        es_client: Any = None,
        database: Any = None,
        *,
        store_fields: ConfigurationRegistry | None = None,
        index_fields: ConfigurationRegistry | None = None,
    ) -> None:
        self._settings = settings
        self._es = es_client
        self._db = database
        self._store_fields = store_fields or store_registry()
        self._index_fields = index_fields or index_registry()

    def backend_for(self, entity: str, backend: str | None = None) -> str:
        chosen = backend or DEFAULT_BACKENDS.get(entity, STORE)
        if chosen not in (INDEX, STORE):
            raise ApplicationError(f"Unknown search backend '{chosen}'", code="unknown_backend")
        if chosen == INDEX and (not self._settings.elasticsearch_enabled or self._es is None):
            logger.debug("index_backend_disabled", entity=entity)
            return STORE
        return chosen

    def collection(self, entity: str) -> Any:
        self._check(entity)
        if self._db is None:
            raise ApplicationError("No store database configured", code="store_not_configured")
        return self._db[COLLECTIONS.get(entity, entity)]

    def record_source(self, entity: str) -> MongoRecordSource:
        return MongoRecordSource(self.collection(entity), batch_size=self._settings.bulk_chunk_size)

    def index_manager(self, entity: str) -> IndexManager:
        self._check(entity)
        return IndexManager(
            self._es,
            self._settings.index_name(entity),
            mapping_for(entity),
            self.record_source(entity),
            chunk_size=self._settings.bulk_chunk_size,
        )

    def synchronizer(self, entity: str) -> DocumentSynchronizer:
        manager = self.index_manager(entity)
        return DocumentSynchronizer(
            manager,
            self.record_source(entity),
            max_attempts=self._settings.sync_max_attempts,
        )

    def strategy(self, entity: str, backend: str | None = None) -> SearchStrategy:
        self._check(entity)
        if self.backend_for(entity, backend) == INDEX:
            return IndexSearchStrategy(
                entity,
                self._es,
                self._settings.index_name(entity),
                self._index_fields.resolve(entity),
                manager=self.index_manager(entity),
                max_result_window=self._settings.max_result_window,
            )
        return StoreSearchStrategy(entity, self.collection(entity), self._store_fields.resolve(entity))

    def for_entity(self, entity: str, backend: str | None = None) -> SearchFacade:
        return SearchFacade(
            self.strategy(entity, backend),
            default_per_page=self._settings.default_per_page,
            max_per_page=self._settings.max_per_page,
        )

    @staticmethod
    def _check(entity: str) -> None:
        if not entity or not str(entity).strip():
            raise UnknownEntityError(str(entity))
