"""Elasticsearch adapter – index backend: compilers, strategy and index lifecycle.

Requires ``elasticsearch`` 8.x (synchronous client).
"""

from admin_search.adapters.elasticsearch.client import build_elasticsearch_client
from admin_search.adapters.elasticsearch.filter_builder import FilterBuilder
from admin_search.adapters.elasticsearch.index_manager import IndexManager, IndexStats
from admin_search.adapters.elasticsearch.query_builder import QueryBuilder
from admin_search.adapters.elasticsearch.sort_builder import SortBuilder
from admin_search.adapters.elasticsearch.strategy import IndexSearchStrategy
from admin_search.adapters.elasticsearch.sync import DocumentSynchronizer

__all__ = [
    "DocumentSynchronizer",
    "FilterBuilder",
    "IndexManager",
    "IndexSearchStrategy",
    "IndexStats",
    "QueryBuilder",
    "SortBuilder",
    "build_elasticsearch_client",
]
