"""Unit tests for SearchFacadeFactory – backend selection and wiring."""

from __future__ import annotations

import pytest
from bson import ObjectId

from admin_search.adapters.elasticsearch import DocumentSynchronizer, IndexSearchStrategy
from admin_search.adapters.factory import SearchFacadeFactory
from admin_search.adapters.mongodb import StoreSearchStrategy
from admin_search.application.search import ENTITIES, INDEX, STORE
from admin_search.config import SearchSettings
from admin_search.kernel.errors import ApplicationError, UnknownEntityError
from admin_search.testing.fakes import FakeCollection, FakeElasticsearch


def _database(*names: str) -> dict[str, FakeCollection]:
    return {name: FakeCollection([], name=name) for name in names}


@pytest.fixture()
def factory() -> SearchFacadeFactory:
    return SearchFacadeFactory(
        SearchSettings(index_prefix="test_"),
        FakeElasticsearch(),
        _database(*ENTITIES, "venues"),
    )


class TestBackendSelection:
    @pytest.mark.parametrize("entity", ["events", "organizers", "roles", "ticket_types"])
    def test_index_defaults(self, factory: SearchFacadeFactory, entity: str) -> None:
        assert factory.backend_for(entity) == INDEX

    @pytest.mark.parametrize("entity", ["banks", "categories", "event_types", "users", "venues"])
    def test_store_defaults(self, factory: SearchFacadeFactory, entity: str) -> None:
        assert factory.backend_for(entity) == STORE

    def test_explicit_backend_wins(self, factory: SearchFacadeFactory) -> None:
        assert factory.backend_for("banks", INDEX) == INDEX
        assert factory.backend_for("events", STORE) == STORE

    def test_unknown_backend(self, factory: SearchFacadeFactory) -> None:
        with pytest.raises(ApplicationError) as info:
            factory.backend_for("events", "solr")
        assert info.value.code == "unknown_backend"

    def test_disabled_index_falls_back_to_store(self) -> None:
        factory = SearchFacadeFactory(
            SearchSettings(elasticsearch_enabled=False), FakeElasticsearch(), _database("events")
        )
        assert factory.backend_for("events") == STORE
        assert isinstance(factory.strategy("events"), StoreSearchStrategy)

    def test_missing_client_falls_back_to_store(self) -> None:
        factory = SearchFacadeFactory(SearchSettings(), None, _database("events"))
        assert factory.backend_for("events", INDEX) == STORE


class TestWiring:
    def test_result_window_from_settings(self) -> None:
        factory = SearchFacadeFactory(SearchSettings(max_result_window=500), FakeElasticsearch(), _database("events"))
        page = factory.for_entity("events").execute({"page": 51, "per_page": 10})
        assert page.is_empty
        assert factory.index_manager("events").client.searches[-1]["size"] == 0

    def test_index_strategy_uses_prefixed_index(self, factory: SearchFacadeFactory) -> None:
        strategy = factory.strategy("events")
        assert isinstance(strategy, IndexSearchStrategy)
        assert strategy.index == "test_events"
        assert strategy.manager is not None
        assert strategy.manager.index == "test_events"

    def test_store_strategy_uses_collection(self, factory: SearchFacadeFactory) -> None:
        strategy = factory.strategy("banks")
        assert isinstance(strategy, StoreSearchStrategy)
        assert strategy.collection.name == "banks"

    def test_unlisted_entity_searches_its_collection(self, factory: SearchFacadeFactory) -> None:
        facade = factory.for_entity("venues")
        assert facade.strategy.backend == STORE
        assert facade.execute({}).total_count == 0

    @pytest.mark.parametrize("entity", ["", "   "])
    def test_blank_entity(self, factory: SearchFacadeFactory, entity: str) -> None:
        with pytest.raises(UnknownEntityError):
            factory.for_entity(entity)

    def test_store_not_configured(self) -> None:
        factory = SearchFacadeFactory(SearchSettings(), FakeElasticsearch(), None)
        with pytest.raises(ApplicationError) as info:
            factory.for_entity("banks")
        assert info.value.code == "store_not_configured"

    def test_facade_uses_paging_settings(self) -> None:
        docs = [{"_id": ObjectId(), "name": f"bank {i}"} for i in range(30)]
        factory = SearchFacadeFactory(
            SearchSettings(default_per_page=5, max_per_page=20),
            None,
            {"banks": FakeCollection(docs, name="banks")},
        )
        facade = factory.for_entity("banks")
        assert len(facade.execute({})) == 5
        assert len(facade.execute({"per_page": 500})) == 20


class TestSynchronizer:
    def test_synchronizer_indexes_into_prefixed_index(self, factory: SearchFacadeFactory) -> None:
        record = {"_id": ObjectId(), "name": "Jakarta Events Co"}
        factory.collection("organizers").documents.append(record)
        sync = factory.synchronizer("organizers")
        assert isinstance(sync, DocumentSynchronizer)
        assert sync.sync(str(record["_id"])) == "indexed"
        es = factory.index_manager("organizers").client
        assert es.documents["test_organizers"][str(record["_id"])]["name"] == "Jakarta Events Co"


class TestStoreTextSearch:
    def test_factory_facade_creates_text_index(self) -> None:
        organizers = FakeCollection([{"_id": ObjectId(), "name": "Jakarta Live"}], name="organizers")
        factory = SearchFacadeFactory(SearchSettings(elasticsearch_enabled=False), None, {"organizers": organizers})
        page = factory.for_entity("organizers").execute({"query": "Jakarta"})
        assert page.total_count == 1
        assert organizers.indexes[0]["name"] == "organizers_text"
