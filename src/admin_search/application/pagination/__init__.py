"""Application pagination – page request and the uniform result set."""
from admin_search.application.pagination.page import PaginatedResultSet
from admin_search.application.pagination.page_request import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    PageRequest,
)

__all__ = ["DEFAULT_PER_PAGE", "MAX_PER_PAGE", "PageRequest", "PaginatedResultSet"]
