"""MongoDB adapter – database handle from SearchSettings."""
from __future__ import annotations

from pymongo import MongoClient
from pymongo.database import Database

from admin_search.config.settings.search import SearchSettings

__all__ = ["build_mongo_database"]


def build_mongo_database(settings: SearchSettings, client: MongoClient | None = None) -> Database:
    """Return ``settings.mongodb_database`` on a (possibly shared) client."""
    client = client or MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )
    return client[settings.mongodb_database]
