"""Application search – RecordSource port.

The authoritative store, as seen by index population and single-document
synchronisation.
"""
from __future__ import annotations

from typing import Any, Iterator, Mapping, Protocol, runtime_checkable

__all__ = ["RecordSource"]


@runtime_checkable
class RecordSource(Protocol):
    def count(self) -> int: ...

    def iter_documents(self) -> Iterator[Mapping[str, Any]]: ...

    def find(self, record_id: Any) -> Mapping[str, Any] | None: ...
