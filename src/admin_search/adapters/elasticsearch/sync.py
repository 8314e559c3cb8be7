"""Elasticsearch adapter – DocumentSynchronizer.

Body of the write-time reindex job: after a record is created, updated or
deleted in the store, bring its indexed copy up to date.  Dispatching the
job is left to the caller.
"""
from __future__ import annotations

from typing import Any

import tenacity
from elasticsearch import NotFoundError, TransportError

from admin_search.adapters.elasticsearch.index_manager import IndexManager
from admin_search.application.search.source import RecordSource
from admin_search.observability.logging import get_logger

__all__ = ["DocumentSynchronizer", "INDEX_ACTION", "DELETE_ACTION"]

logger = get_logger(__name__)

INDEX_ACTION = "index"
DELETE_ACTION = "delete"


class DocumentSynchronizer:
    """Index or delete a single document, retrying transport failures.

    Usage::

        sync = DocumentSynchronizer(manager, MongoRecordSource(db.events))
        sync.sync(event_id)                    # upsert
        sync.sync(event_id, action="delete")   # remove

    :meth:`sync` returns ``"indexed"``, ``"deleted"`` or ``"skipped"``.
    Transport errors are retried with exponential backoff and re-raised
    once *max_attempts* is exhausted, so a job runner can reschedule.
    """

    def __init__(
        self,
        manager: IndexManager,
        source: RecordSource,
        *,
        max_attempts: int = 5,
        wait: Any = None,
    ) -> None:
        self._manager = manager
        self._client = manager.client
        self._source = source
        self._max_attempts = max_attempts
        self._wait = wait if wait is not None else tenacity.wait_exponential(multiplier=0.5, max=8)

    def _retrying(self) -> tenacity.Retrying:
        return tenacity.Retrying(
            stop=tenacity.stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=tenacity.retry_if_exception_type(TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    def _log_retry(self, state: tenacity.RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome is not None else None
        logger.warning(
            "document_sync_retry",
            index=self._manager.index,
            attempt=state.attempt_number,
            error=str(error),
        )

    def sync(self, record_id: Any, action: str = INDEX_ACTION) -> str:
        if action == INDEX_ACTION:
            return self._index(record_id)
        if action == DELETE_ACTION:
            return self._delete(record_id)
        logger.warning("document_sync_unknown_action", index=self._manager.index, action=action)
        return "skipped"

    def _index(self, record_id: Any) -> str:
        record = self._source.find(record_id)
        if record is None:
            logger.info("document_sync_record_missing", index=self._manager.index, id=str(record_id))
            return "skipped"
        document = self._manager.mapping.document_for(record)
        self._retrying()(
            self._client.index,
            index=self._manager.index,
            id=str(record["_id"]),
            document=document,
        )
        logger.debug("document_indexed", index=self._manager.index, id=str(record["_id"]))
        return "indexed"

    def _delete(self, record_id: Any) -> str:
        try:
            self._retrying()(self._client.delete, index=self._manager.index, id=str(record_id))
        except NotFoundError:
            logger.info("document_sync_already_deleted", index=self._manager.index, id=str(record_id))
            return "skipped"
        logger.debug("document_deleted", index=self._manager.index, id=str(record_id))
        return "deleted"
