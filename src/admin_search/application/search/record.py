"""Application search – SearchRecord value object."""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Iterator, Mapping

__all__ = ["SearchRecord"]


@dataclasses.dataclass(frozen=True)
class SearchRecord:
    """One search result: an opaque id plus the fields the backend returned.

    ``score`` is the relevance score on the index backend and ``None`` on
    the store backend.
    """

    id: str
    fields: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    score: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, name: str) -> Any:
        if name in ("id", "_id"):
            return self.id
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in ("id", "_id") or name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __hash__(self) -> int:
        return hash((self.id, self.score))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchRecord):
            return NotImplemented
        return self.id == other.id and dict(self.fields) == dict(other.fields) and self.score == other.score

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self[name]
        except KeyError:
            return default

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with the id under ``"id"`` (JSON-friendly)."""
        return {"id": self.id, **self.fields}

    @classmethod
    def from_document(cls, document: Mapping[str, Any], score: float | None = None) -> "SearchRecord":
        """Build from a store document, stringifying its ``_id``."""
        fields = {key: value for key, value in document.items() if key != "_id"}
        return cls(id=str(document.get("_id", "")), fields=fields, score=score)

    @classmethod
    def from_hit(cls, hit: Mapping[str, Any]) -> "SearchRecord":
        """Build from an Elasticsearch search hit."""
        score = hit.get("_score")
        return cls(
            id=str(hit["_id"]),
            fields=hit.get("_source") or {},
            score=float(score) if score is not None else None,
        )
