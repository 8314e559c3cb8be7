"""Application pagination – PaginatedResultSet."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from admin_search.application.pagination.page_request import PageRequest

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class PaginatedResultSet(Generic[T]):
    """One page of search results with computed navigation properties.

    Both search backends return this type, so response formatting never
    needs to know which backend served a request.  A page past the end is
    not an error: it carries no items and still reports consistent totals.
    """

    items: tuple[T, ...]
    current_page: int
    per_page: int
    total_count: int

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0 or self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.per_page)

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.current_page < self.total_pages else None

    @property
    def prev_page(self) -> int | None:
        return self.current_page - 1 if self.current_page > 1 else None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def out_of_range(self) -> bool:
        return self.current_page > self.total_pages

    @property
    def is_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def is_last_page(self) -> bool:
        return self.current_page == self.total_pages

    def map(self, fn: Callable[[T], Any]) -> "PaginatedResultSet[Any]":
        """Return a new result set with each item transformed by *fn*."""
        return dataclasses.replace(self, items=tuple(fn(item) for item in self.items))

    def to_meta(self) -> dict[str, int | None]:
        """Pagination block for API response envelopes."""
        return {
            "current_page": self.current_page,
            "next_page": self.next_page,
            "prev_page": self.prev_page,
            "total_pages": self.total_pages,
            "total_count": self.total_count,
            "per_page": self.per_page,
        }

    @classmethod
    def of(cls, items: Iterable[T], request: PageRequest, total_count: int) -> "PaginatedResultSet[T]":
        """Wrap an already-sliced page of *items*."""
        return cls(
            items=tuple(items),
            current_page=request.page,
            per_page=request.per_page,
            total_count=max(int(total_count), 0),
        )

    @classmethod
    def slice(cls, all_items: Sequence[T], request: PageRequest) -> "PaginatedResultSet[T]":
        """Build a page by slicing the complete, ordered *all_items*."""
        start = request.offset
        return cls.of(all_items[start:start + request.per_page], request, len(all_items))


__all__ = ["PaginatedResultSet"]
