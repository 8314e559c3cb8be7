"""MongoDB adapter – MongoRecordSource."""
from __future__ import annotations

from typing import Any, Iterator, Mapping

from bson import ObjectId
from bson.errors import InvalidId

__all__ = ["MongoRecordSource"]


def _record_id(record_id: Any) -> Any:
    if isinstance(record_id, str):
        try:
            return ObjectId(record_id)
        except InvalidId:
            return record_id
    return record_id


class MongoRecordSource:
    """Enumerate a collection's documents for index population.

    A string id that parses as an ObjectId is looked up as one first, then
    as the plain string.
    """

    def __init__(self, collection: Any, *, batch_size: int = 500) -> None:
        self._col = collection
        self._batch_size = batch_size

    def count(self) -> int:
        return int(self._col.count_documents({}))

    def iter_documents(self) -> Iterator[Mapping[str, Any]]:
        yield from self._col.find({}).sort([("_id", 1)]).batch_size(self._batch_size)

    def find(self, record_id: Any) -> Mapping[str, Any] | None:
        lookup = _record_id(record_id)
        document = self._col.find_one({"_id": lookup})
        if document is None and lookup is not record_id:
            document = self._col.find_one({"_id": record_id})
        return document
