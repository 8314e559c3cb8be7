"""Elasticsearch adapter – client construction from SearchSettings."""
from __future__ import annotations

from typing import Any

from elasticsearch import Elasticsearch

from admin_search.config.settings.search import SearchSettings
from admin_search.observability.logging import get_logger

__all__ = ["build_elasticsearch_client"]

logger = get_logger(__name__)


def build_elasticsearch_client(settings: SearchSettings) -> Elasticsearch:
    """Return a synchronous client for ``settings.elasticsearch_url``.

    Basic auth and a custom CA bundle are only passed when configured.
    """
    kwargs: dict[str, Any] = {"request_timeout": settings.request_timeout}
    if settings.elasticsearch_username:
        kwargs["basic_auth"] = (settings.elasticsearch_username, settings.elasticsearch_password or "")
    if settings.elasticsearch_ca_file:
        kwargs["ca_certs"] = settings.elasticsearch_ca_file
    logger.debug("elasticsearch_client_created", url=settings.elasticsearch_url)
    return Elasticsearch(settings.elasticsearch_url, **kwargs)
