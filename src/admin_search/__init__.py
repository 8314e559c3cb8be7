"""
admin_search – uniform search, filter, sort and pagination for admin resources.

Import path convention::

    from admin_search.application.search import SearchFacade
    from admin_search.application.pagination import PaginatedResultSet
    from admin_search.adapters.elasticsearch import IndexManager
    from admin_search.adapters.factory import SearchFacadeFactory
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
