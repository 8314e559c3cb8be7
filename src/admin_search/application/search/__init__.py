"""Application search – backend-neutral search contract.

Both backends share the request normalisation, filter classification, sort
parsing and result types defined here; each backend adapter only renders
them into its own query language.
"""
from admin_search.application.search.entities import (
    ENTITIES,
    INDEX,
    STORE,
    IndexMapping,
    index_registry,
    mapping_for,
    store_registry,
)
from admin_search.application.search.facade import SearchFacade
from admin_search.application.search.fields import (
    INDEX_DEFAULTS,
    STORE_DEFAULTS,
    ConfigurationRegistry,
    FieldConfiguration,
)
from admin_search.application.search.query import (
    WILDCARD_QUERY,
    FieldFilter,
    FilterKind,
    SearchRequest,
    SortDirection,
    SortField,
    classify_filter,
    classify_filters,
    is_blank,
    parse_sort_spec,
    resolve_ordering,
)
from admin_search.application.search.record import SearchRecord
from admin_search.application.search.source import RecordSource
from admin_search.application.search.strategy import SearchStrategy

__all__ = [
    "ConfigurationRegistry",
    "ENTITIES",
    "FieldConfiguration",
    "FieldFilter",
    "FilterKind",
    "INDEX",
    "INDEX_DEFAULTS",
    "IndexMapping",
    "RecordSource",
    "STORE",
    "STORE_DEFAULTS",
    "SearchFacade",
    "SearchRecord",
    "SearchRequest",
    "SearchStrategy",
    "SortDirection",
    "SortField",
    "WILDCARD_QUERY",
    "classify_filter",
    "classify_filters",
    "index_registry",
    "is_blank",
    "mapping_for",
    "parse_sort_spec",
    "resolve_ordering",
    "store_registry",
]
