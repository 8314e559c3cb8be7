"""MongoDB adapter – store backend: compilers, strategy and record source.

Requires ``pymongo`` (synchronous driver).
"""

from admin_search.adapters.mongodb.client import build_mongo_database
from admin_search.adapters.mongodb.filter_builder import FilterBuilder
from admin_search.adapters.mongodb.query_builder import QueryBuilder
from admin_search.adapters.mongodb.sort_builder import SortBuilder
from admin_search.adapters.mongodb.source import MongoRecordSource
from admin_search.adapters.mongodb.strategy import StoreSearchStrategy

__all__ = [
    "FilterBuilder",
    "MongoRecordSource",
    "QueryBuilder",
    "SortBuilder",
    "StoreSearchStrategy",
    "build_mongo_database",
]
