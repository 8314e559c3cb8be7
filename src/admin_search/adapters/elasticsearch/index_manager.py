"""Elasticsearch adapter – IndexManager and IndexStats.

Index lifecycle for one entity: ``Missing → EmptyExists → Populated``.
Every public operation except :meth:`IndexManager.create_index` swallows
and logs its failures, so a broken or unreachable cluster never breaks the
caller; the search itself then reports the outage.

There is no locking.  Two processes populating the same cold index at once
only waste work, because every document is upserted under the string form
of its store ``_id``.
"""
from __future__ import annotations

import dataclasses
from itertools import islice
from typing import Any, Iterable, Iterator, Mapping

from elasticsearch import BadRequestError

from admin_search.application.search.entities import IndexMapping
from admin_search.application.search.source import RecordSource
from admin_search.kernel.errors import IndexPopulationError
from admin_search.observability.logging import get_logger

__all__ = ["IndexManager", "IndexStats"]

logger = get_logger(__name__)

ALREADY_EXISTS = "resource_already_exists_exception"


@dataclasses.dataclass(frozen=True)
class IndexStats:
    exists: bool
    document_count: int
    source_count: int

    @property
    def in_sync(self) -> bool:
        return self.document_count == self.source_count


def _chunks(documents: Iterable[Mapping[str, Any]], size: int) -> Iterator[list[Mapping[str, Any]]]:
    iterator = iter(documents)
    while chunk := list(islice(iterator, size)):
        yield chunk


def _bulk_failures(response: Mapping[str, Any]) -> int:
    if not response.get("errors"):
        return 0
    return sum(
        1
        for item in response.get("items", [])
        for result in item.values()
        if isinstance(result, Mapping) and result.get("error")
    )


class IndexManager:
    """Create, populate and inspect the search index of one entity.

    Parameters
    ----------
    client:
        A synchronous :class:`elasticsearch.Elasticsearch` client.
    index:
        Physical index name (already prefixed).
    mapping:
        Settings, field mapping and document serialisation for the entity.
    source:
        The authoritative store the index is a copy of.
    chunk_size:
        Documents per bulk request.
    """

    def __init__(
        self,
        client: Any,
        index: str,
        mapping: IndexMapping,
        source: RecordSource,
        *,
        chunk_size: int = 500,
    ) -> None:
        self._client = client
        self._index = index
        self._mapping = mapping
        self._source = source
        self._chunk_size = chunk_size

    @property
    def client(self) -> Any:
        return self._client

    @property
    def index(self) -> str:
        return self._index

    @property
    def mapping(self) -> IndexMapping:
        return self._mapping

    # ------------------------------------------------------------------
    # Index administration
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return bool(self._client.indices.exists(index=self._index))

    def document_count(self) -> int:
        return int(self._client.count(index=self._index)["count"])

    def create_index(self) -> bool:
        """Create the index; ``False`` when it already existed.

        A concurrent creator winning the race is not an error.
        """
        try:
            self._client.indices.create(
                index=self._index,
                settings=self._mapping.settings,
                mappings=self._mapping.mappings,
            )
        except BadRequestError as exc:
            if exc.error != ALREADY_EXISTS:
                raise
            logger.debug("index_already_exists", index=self._index)
            return False
        logger.info("index_created", index=self._index)
        return True

    def available(self) -> bool:
        """Whether the cluster answers a ping."""
        try:
            return bool(self._client.ping())
        except Exception:  # noqa: BLE001
            return False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def ensure_ready(self) -> None:
        """Make sure the index exists and, when the store has records, holds documents.

        A no-op on the hot path (index present and non-empty).
        """
        try:
            if self.exists():
                if self.document_count() > 0:
                    return
            else:
                self.create_index()
            if self._source.count() > 0 and self.document_count() == 0:
                logger.info("index_empty_populating", index=self._index)
                self.populate()
        except Exception as exc:  # noqa: BLE001
            logger.warning("index_ensure_ready_failed", index=self._index, error=str(exc))

    def populate(self) -> int:
        """Import every source record; return the number of documents indexed.

        Tries chunked bulk requests first and falls back to indexing records
        one at a time when any bulk request fails.
        """
        try:
            return self._bulk_import()
        except Exception as exc:  # noqa: BLE001
            logger.warning("bulk_import_failed", index=self._index, error=str(exc))
        try:
            return self._import_each()
        except Exception as exc:  # noqa: BLE001
            logger.error("document_import_failed", index=self._index, error=str(exc))
            return 0

    def reindex_all(self, force: bool = False) -> None:
        """Drop, recreate and refill the index.

        A missing index is left alone unless *force* is set.
        """
        try:
            exists = self.exists()
            if not exists and not force:
                logger.warning("reindex_skipped_missing_index", index=self._index)
                return
            if exists:
                self._client.indices.delete(index=self._index)
                logger.info("index_deleted", index=self._index)
            self.create_index()
            indexed = self.populate()
            logger.info("index_rebuilt", index=self._index, documents=indexed)
        except Exception as exc:  # noqa: BLE001
            logger.error("reindex_failed", index=self._index, error=str(exc))

    def index_stats(self) -> IndexStats:
        """Existence and counts; any failed lookup reads as absent or zero."""
        try:
            exists = self.exists()
        except Exception as exc:  # noqa: BLE001
            logger.warning("index_stats_failed", index=self._index, stage="exists", error=str(exc))
            exists = False
        document_count = 0
        if exists:
            try:
                document_count = self.document_count()
            except Exception as exc:  # noqa: BLE001
                logger.warning("index_stats_failed", index=self._index, stage="count", error=str(exc))
        try:
            source_count = self._source.count()
        except Exception as exc:  # noqa: BLE001
            logger.warning("index_stats_failed", index=self._index, stage="source_count", error=str(exc))
            source_count = 0
        return IndexStats(exists=exists, document_count=document_count, source_count=source_count)

    # ------------------------------------------------------------------
    # Import tiers
    # ------------------------------------------------------------------

    def _operations(self, chunk: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
        operations: list[dict[str, Any]] = []
        for record in chunk:
            operations.append({"index": {"_index": self._index, "_id": str(record["_id"])}})
            operations.append(self._mapping.document_for(record))
        return operations

    def _bulk_import(self) -> int:
        indexed = 0
        for chunk in _chunks(self._source.iter_documents(), self._chunk_size):
            response = self._client.bulk(operations=self._operations(chunk), refresh=True)
            failed = _bulk_failures(response)
            if failed:
                raise IndexPopulationError(self._index, failed=failed)
            indexed += len(chunk)
        logger.info("bulk_import_completed", index=self._index, documents=indexed)
        return indexed

    def _import_each(self) -> int:
        indexed = failed = 0
        for record in self._source.iter_documents():
            try:
                self._client.index(
                    index=self._index,
                    id=str(record["_id"]),
                    document=self._mapping.document_for(record),
                )
                indexed += 1
            except Exception as exc:  # noqa: BLE001
                failed += 1
                logger.debug("document_import_failed", index=self._index, id=str(record.get("_id")), error=str(exc))
        self._client.indices.refresh(index=self._index)
        logger.info("document_import_completed", index=self._index, documents=indexed, failed=failed)
        return indexed
