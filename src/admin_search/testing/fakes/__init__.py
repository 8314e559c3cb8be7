"""Testing fakes – in-memory doubles for the search backends."""
from admin_search.testing.fakes.elasticsearch import FakeElasticsearch, api_error
from admin_search.testing.fakes.mongodb import FakeCollection, FakeCursor

__all__ = [
    "FakeCollection",
    "FakeCursor",
    "FakeElasticsearch",
    "api_error",
]
