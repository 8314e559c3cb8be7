"""Testing fakes – FakeElasticsearch."""
from __future__ import annotations

from typing import Any

from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import ApiError, BadRequestError, NotFoundError

__all__ = ["FakeElasticsearch", "api_error"]


def api_error(cls: type[ApiError], status: int, error_type: str) -> ApiError:
    """Build an ``elasticsearch`` API error the way the client raises it."""
    meta = ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    body = {"error": {"root_cause": [{"type": error_type, "reason": error_type}], "type": error_type}, "status": status}
    return cls(error_type, meta, body)


class _FakeIndices:
    def __init__(self, es: "FakeElasticsearch") -> None:
        self._es = es

    def exists(self, index: str) -> bool:
        self._es._maybe_fail("indices.exists")
        return index in self._es.documents

    def create(self, index: str, settings: Any = None, mappings: Any = None, **_: Any) -> dict[str, Any]:
        self._es._maybe_fail("indices.create")
        if index in self._es.documents:
            raise api_error(BadRequestError, 400, "resource_already_exists_exception")
        self._es.documents[index] = {}
        self._es.index_bodies[index] = {"settings": settings, "mappings": mappings}
        return {"acknowledged": True, "index": index}

    def delete(self, index: str, **_: Any) -> dict[str, Any]:
        self._es._maybe_fail("indices.delete")
        if index not in self._es.documents:
            raise api_error(NotFoundError, 404, "index_not_found_exception")
        del self._es.documents[index]
        self._es.index_bodies.pop(index, None)
        return {"acknowledged": True}

    def refresh(self, index: str, **_: Any) -> dict[str, Any]:
        self._es._maybe_fail("indices.refresh")
        self._es.refreshes.append(index)
        return {"_shards": {"failed": 0}}


class FakeElasticsearch:
    """In-memory stand-in for the synchronous ``Elasticsearch`` client.

    Documents are stored per index and ``search`` returns them in insertion
    order without evaluating the query; set :attr:`search_response` for a
    canned answer.  Every ``search`` call's keyword arguments are recorded
    in :attr:`searches`.  Like a real cluster, ``search`` rejects pages past
    :attr:`max_result_window` and sorts on ``_id``, and a missing index is
    a 404.

    Failures are injected per operation name (``"search"``, ``"bulk"``,
    ``"indices.exists"``, ...)::

        es.fail("search", elasticsearch.ConnectionError("down"))
        es.fail("index", elasticsearch.ConnectionError("flaky"), times=2)
    """

    def __init__(self, *, available: bool = True) -> None:
        self.indices = _FakeIndices(self)
        self.available = available
        self.documents: dict[str, dict[str, dict[str, Any]]] = {}
        self.index_bodies: dict[str, dict[str, Any]] = {}
        self.searches: list[dict[str, Any]] = []
        self.bulk_calls: list[dict[str, Any]] = []
        self.refreshes: list[str] = []
        self.search_response: dict[str, Any] | None = None
        self.bulk_item_errors = False
        self.max_result_window = 10000
        self._failures: dict[str, list[Any]] = {}

    # ------------------------------------------------------------------
    # Failure injection
    # ------------------------------------------------------------------

    def fail(self, operation: str, exc: BaseException, times: int | None = None) -> None:
        self._failures[operation] = [exc, times]

    def recover(self, operation: str | None = None) -> None:
        if operation is None:
            self._failures.clear()
        else:
            self._failures.pop(operation, None)

    def _maybe_fail(self, operation: str) -> None:
        entry = self._failures.get(operation)
        if entry is None:
            return
        exc, remaining = entry
        if remaining is not None:
            if remaining <= 0:
                del self._failures[operation]
                return
            entry[1] = remaining - 1
        raise exc

    # ------------------------------------------------------------------
    # Client API
    # ------------------------------------------------------------------

    def ping(self, **_: Any) -> bool:
        self._maybe_fail("ping")
        return self.available

    def count(self, index: str, **_: Any) -> dict[str, Any]:
        self._maybe_fail("count")
        if index not in self.documents:
            raise api_error(NotFoundError, 404, "index_not_found_exception")
        return {"count": len(self.documents[index])}

    def index(self, index: str, id: str, document: dict[str, Any], **_: Any) -> dict[str, Any]:
        self._maybe_fail("index")
        docs = self.documents.setdefault(index, {})
        result = "updated" if id in docs else "created"
        docs[id] = dict(document)
        return {"_index": index, "_id": id, "result": result}

    def delete(self, index: str, id: str, **_: Any) -> dict[str, Any]:
        self._maybe_fail("delete")
        docs = self.documents.get(index, {})
        if id not in docs:
            raise api_error(NotFoundError, 404, "not_found")
        del docs[id]
        return {"_index": index, "_id": id, "result": "deleted"}

    def bulk(self, operations: list[dict[str, Any]], refresh: Any = None, **_: Any) -> dict[str, Any]:
        self._maybe_fail("bulk")
        self.bulk_calls.append({"operations": list(operations), "refresh": refresh})
        items: list[dict[str, Any]] = []
        for action, document in zip(operations[::2], operations[1::2]):
            meta = action["index"]
            if self.bulk_item_errors:
                error = {"type": "mapper_parsing_exception"}
                items.append({"index": {"_id": meta["_id"], "status": 400, "error": error}})
                continue
            self.documents.setdefault(meta["_index"], {})[meta["_id"]] = dict(document)
            items.append({"index": {"_id": meta["_id"], "status": 201}})
        return {"errors": self.bulk_item_errors, "items": items}

    def search(self, index: str, **kwargs: Any) -> dict[str, Any]:
        self._maybe_fail("search")
        self.searches.append({"index": index, **kwargs})
        start = kwargs.get("from_", 0) or 0
        size = kwargs.get("size", 10)
        if start + size > self.max_result_window:
            raise api_error(BadRequestError, 400, "illegal_argument_exception")
        if any("_id" in clause for clause in kwargs.get("sort") or ()):
            # fielddata on _id is disabled in 8.x
            raise api_error(BadRequestError, 400, "illegal_argument_exception")
        if self.search_response is not None:
            return self.search_response
        if index not in self.documents:
            raise api_error(NotFoundError, 404, "index_not_found_exception")
        docs = list(self.documents[index].items())
        hits = [
            {"_index": index, "_id": doc_id, "_score": 1.0, "_source": source}
            for doc_id, source in docs[start:start + size]
        ]
        return {"hits": {"total": {"value": len(docs), "relation": "eq"}, "max_score": 1.0, "hits": hits}}
